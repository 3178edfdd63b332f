#!/usr/bin/env python3
"""
Inspector-style example showing what MemberTree sees in an object.

This example demonstrates:
- Printing a member tree with kinds, types and values
- Tag-driven queries (editing every member tagged Editable)
- Writing values back through nodes, with type conversion
"""

import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Annotated, List

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from membertree import MemberTree, NodeKind, annotate, get_tree_stats


class Editable:
    """Marks a member an editor may change."""

    def __init__(self, low=None, high=None):
        self.low = low
        self.high = high


class Team(Enum):
    RED = "red"
    BLUE = "blue"


@dataclass
class Weapon:
    name: str = "sword"
    damage: Annotated[int, Editable(1, 50)] = 12


@dataclass
class Loadout:
    primary: Weapon = field(default_factory=Weapon)
    ammo: List[int] = field(default_factory=lambda: [30, 30])


class Unit:
    _speed: Annotated[float, Editable(0.0, 10.0)]
    team: Annotated[Team, Editable()]
    loadout: Loadout

    def __init__(self):
        self._speed = 3.5
        self.team = Team.RED
        self.loadout = Loadout()
        self.target = None

    @property
    def speed(self) -> float:
        return self._speed

    @speed.setter
    def speed(self, value: float):
        self._speed = value

    @annotate(Editable())
    def respawn(self) -> None:
        self.loadout = Loadout()


def print_tree(node, indent=0):
    """Print a node and its children."""
    if node.kind is NodeKind.METHOD:
        value = "()"
    elif node.is_unreadable:
        value = f"<unreadable: {node.read_error}>"
    else:
        value = repr(node.value) if node.is_leaf() else ""
    type_name = getattr(node.declared_type, "__name__", node.declared_type)
    print(f"{'  ' * indent}{node.name} [{node.kind.value}: {type_name}] {value}")
    for child in node.get_children():
        print_tree(child, indent + 1)


def main():
    """Build, print, query and edit a member tree."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    unit = Unit()
    tree = MemberTree(unit)

    print("Member tree:")
    print("-" * 50)
    print_tree(tree.root)

    print("\nEditable members:")
    for node, tag in tree.find_members_with_annotation(Editable, recursive=True):
        bounds = f" [{tag.low}, {tag.high}]" if tag.low is not None else ""
        print(f"  {node.path}{bounds}")

    # Values typed into an editor arrive as text
    tree.find_member("speed").set_value("7.25")
    tree.find_member("team").set_value("BLUE")
    tree.find_member("damage", recursive=True).set_value("20")
    print(f"\nAfter editing: speed={unit.speed}, team={unit.team}, "
          f"damage={unit.loadout.primary.damage}")

    stats = get_tree_stats(tree.root)
    print(f"\nTree Summary:")
    print(f"  Nodes: {stats['total_nodes']}")
    print(f"  Max depth: {stats['max_depth']}")
    print(f"  Kinds: {stats['kinds']}")


if __name__ == "__main__":
    main()
