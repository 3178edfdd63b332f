"""Tests for the MemberTree handle and live value access through nodes."""

from decimal import Decimal

import pytest

from membertree import (
    BuildConfig,
    InvalidRootError,
    MemberTree,
    NodeKind,
    PythonIntrospector,
)
from sample_models import Element, Exposed, Player, Range


class TestMemberTree:
    """Test construction and bookkeeping of the handle."""

    def test_root_is_built_on_construction(self, player, player_tree):
        assert player_tree.root_object is player
        assert player_tree.root.value is player
        assert player_tree.root.is_expanded

    def test_none_root(self):
        with pytest.raises(InvalidRootError):
            MemberTree(None)

    def test_len_counts_root(self, player_tree):
        assert len(player_tree) == 12

    def test_iteration_yields_members(self, player_tree):
        assert [node.path for node in player_tree] == \
            [node.path for node in player_tree.iter_members()]

    def test_repr(self, player_tree):
        assert repr(player_tree) == "MemberTree(root='Player')"

    def test_default_error_policy(self, player_tree):
        assert player_tree.error_policy.errors == []

    def test_config_is_used(self, player):
        tree = MemberTree(player, config=BuildConfig.data_only())

        assert tree.config.include_methods is False
        assert tree.find_member("heal") is None

    def test_rebuild_sees_new_state(self, player, player_tree):
        player.companion = Player("Sidekick")
        assert player_tree.find_member("companion").children is None

        root = player_tree.rebuild()

        assert root is player_tree.root
        companion = player_tree.find_member("companion")
        assert companion.is_expanded
        assert player_tree.find_by_path("Player.companion.name").value == "Sidekick"


class TestMemberNode:
    """Test the node helpers used by tree consumers."""

    def test_root_flags(self, player_tree):
        root = player_tree.root

        assert root.is_root
        assert root.segment == "Player"
        assert not player_tree.find_member("name").is_root

    def test_annotation_helpers(self, player_tree):
        health = player_tree.find_member("health")

        assert health.has_annotation(Exposed)
        assert health.has_annotation(Range)
        assert not player_tree.find_member("kind").has_annotation(Exposed)
        assert health.annotations_of_type(Range)[0].low == 0
        assert health.get_annotation(Element) is None

    def test_iter_ancestors(self, player_tree):
        capacity = player_tree.find_member("capacity", recursive=True)

        assert [n.path for n in capacity.iter_ancestors()] == ["Player.inventory", "Player"]
        assert list(player_tree.root.iter_ancestors()) == []

    def test_metadata(self, player_tree):
        info = player_tree.find_member("inventory").metadata()

        assert info == {
            'name': 'inventory',
            'path': 'Player.inventory',
            'kind': 'field',
            'type': 'Inventory',
            'depth': 1,
            'annotations': 0,
            'children': 2,
            'unreadable': False,
        }
        assert player_tree.find_member("name").metadata()['children'] is None

    def test_identifier_and_repr(self, player_tree):
        health = player_tree.find_member("health")

        assert health.identifier() == "Player._health"
        assert str(health) == "Player._health"
        assert repr(health) == "MemberNode(property 'Player._health' type=int)"


class TestGetValue:
    """Test reading live values through nodes."""

    def test_reads_current_value(self, player, player_tree):
        node = player_tree.find_member("name")
        player.name = "Zed"

        assert node.value == "Hero"
        assert node.get_value() == "Zed"

    def test_reads_property(self, player, player_tree):
        player.heal(5)
        assert player_tree.find_member("health").get_value() == 105

    def test_root_returns_instance(self, player, player_tree):
        assert player_tree.root.get_value() is player

    def test_read_failure_is_raised(self):
        class Flaky:
            def __init__(self):
                self.calls = 0

            @property
            def reading(self) -> int:
                self.calls += 1
                if self.calls > 1:
                    raise RuntimeError("sensor offline")
                return 1

        tree = MemberTree(Flaky())
        node = tree.find_member("reading")
        assert node.value == 1

        with pytest.raises(RuntimeError, match="sensor offline"):
            node.get_value()


class TestSetValue:
    """Test writing values through nodes."""

    def test_writes_field(self, player, player_tree):
        player_tree.find_member("name").set_value("Ada")
        assert player.name == "Ada"

    def test_writes_through_property_setter(self, player, player_tree):
        player_tree.find_member("health").set_value(50)
        assert player._health == 50

    def test_node_value_is_not_refreshed(self, player_tree):
        node = player_tree.find_member("health")
        node.set_value(50)

        assert node.value == 100
        assert node.get_value() == 50

    def test_numeric_string_is_converted(self, player, player_tree):
        player_tree.find_member("health").set_value("75")
        assert player._health == 75

    def test_unconvertible_value_raises(self, player, player_tree):
        with pytest.raises(ValueError):
            player_tree.find_member("health").set_value("abc")
        assert player._health == 100

    def test_enum_by_name_and_value(self, player, player_tree):
        node = player_tree.find_member("element")

        node.set_value("WATER")
        assert player.element is Element.WATER

        node.set_value(1)
        assert player.element is Element.FIRE

    def test_unknown_enum_value_raises(self, player_tree):
        with pytest.raises(ValueError):
            player_tree.find_member("element").set_value(99)

    def test_nested_field(self, player, player_tree):
        player_tree.find_member("capacity", recursive=True).set_value(20.0)

        assert player.inventory.capacity == 20
        assert isinstance(player.inventory.capacity, int)

    def test_read_only_property(self, player_tree):
        with pytest.raises(AttributeError):
            player_tree.find_member("id").set_value(9)

    def test_method_cannot_be_assigned(self, player_tree):
        node = player_tree.find_member("heal")
        assert node.kind is NodeKind.METHOD

        with pytest.raises(AttributeError):
            node.set_value(lambda amount: None)

    def test_root_cannot_be_assigned(self, player_tree):
        with pytest.raises(AttributeError):
            player_tree.root.set_value(Player())

    def test_decimal_field(self):
        class Account:
            balance: Decimal

            def __init__(self):
                self.balance = Decimal("1.50")

        account = Account()
        MemberTree(account).find_member("balance").set_value("2.25")

        assert account.balance == Decimal("2.25")

    def test_bool_is_not_coerced(self):
        class Switch:
            enabled: bool

            def __init__(self):
                self.enabled = False

        switch = Switch()
        MemberTree(switch).find_member("enabled").set_value("False")

        assert switch.enabled == "False"

    def test_coercion_can_be_disabled(self, player):
        tree = MemberTree(player, introspector=PythonIntrospector(coerce_writes=False))
        tree.find_member("health").set_value("75")

        assert player._health == "75"
