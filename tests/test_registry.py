"""Tests for the command registry (core/registry.py).

Coverage:
* ``register`` attaches children and sets the parent link.
* Duplicate sibling names, re-parenting and cycles are rejected.
* ``declare_flag`` builds typed flags and rejects duplicates,
  malformed names and the reserved help flag.
* ``walk`` visits the tree depth-first in declaration order.
"""

from __future__ import annotations

from typing import TextIO

import pytest

from cli_template.core.models import Command, ParsedInvocation
from cli_template.core.registry import declare_flag, register, walk
from cli_template.exceptions import (
    CommandTreeError,
    DuplicateCommandError,
    DuplicateFlagError,
)


def _noop(invocation: ParsedInvocation, out: TextIO) -> None:
    pass


def _cmd(name: str) -> Command:
    return Command(name=name, callback=_noop)


# ---------------------------------------------------------------------------
# register
# ---------------------------------------------------------------------------

class TestRegister:
    def test_attaches_child(self) -> None:
        root, child = _cmd("root"), _cmd("hello")
        returned = register(root, child)

        assert returned is child
        assert root.children == [child]
        assert child.parent is root

    def test_preserves_declaration_order(self) -> None:
        root = _cmd("root")
        for name in ("b", "a", "c"):
            register(root, _cmd(name))
        assert [c.name for c in root.children] == ["b", "a", "c"]

    def test_duplicate_sibling_rejected(self) -> None:
        root = _cmd("root")
        register(root, _cmd("hello"))
        with pytest.raises(DuplicateCommandError, match="hello"):
            register(root, _cmd("hello"))
        assert len(root.children) == 1

    def test_same_name_under_different_parents_allowed(self) -> None:
        root = _cmd("root")
        a = register(root, _cmd("a"))
        b = register(root, _cmd("b"))
        register(a, _cmd("list"))
        register(b, _cmd("list"))
        assert a.find_child("list") is not b.find_child("list")

    def test_reparenting_rejected(self) -> None:
        first, second, child = _cmd("first"), _cmd("second"), _cmd("child")
        register(first, child)
        with pytest.raises(CommandTreeError, match="already registered"):
            register(second, child)
        assert child.parent is first

    def test_self_registration_rejected(self) -> None:
        node = _cmd("node")
        with pytest.raises(CommandTreeError, match="cycle"):
            register(node, node)

    def test_cycle_rejected(self) -> None:
        root, mid, leaf = _cmd("root"), _cmd("mid"), _cmd("leaf")
        register(root, mid)
        register(mid, leaf)
        with pytest.raises(CommandTreeError, match="cycle"):
            register(leaf, root)


# ---------------------------------------------------------------------------
# declare_flag
# ---------------------------------------------------------------------------

class TestDeclareFlag:
    def test_string_flag(self) -> None:
        cmd = _cmd("hello")
        flag = declare_flag(cmd, "name", "n", "", "Name to greet")

        assert cmd.flags == [flag]
        assert flag.name == "name"
        assert flag.short == "n"
        assert flag.default == ""
        assert flag.description == "Name to greet"
        assert flag.is_switch is False

    def test_bool_flag(self) -> None:
        cmd = _cmd("root")
        flag = declare_flag(cmd, "version", "v", False)
        assert flag.is_switch is True

    def test_short_alias_optional(self) -> None:
        flag = declare_flag(_cmd("x"), "verbose-name")
        assert flag.short is None

    def test_duplicate_name_rejected(self) -> None:
        cmd = _cmd("hello")
        declare_flag(cmd, "name", "n")
        with pytest.raises(DuplicateFlagError, match="--name"):
            declare_flag(cmd, "name", "x")

    def test_duplicate_short_rejected(self) -> None:
        cmd = _cmd("hello")
        declare_flag(cmd, "name", "n")
        with pytest.raises(DuplicateFlagError, match="-n"):
            declare_flag(cmd, "nickname", "n")

    def test_same_flag_on_different_commands_allowed(self) -> None:
        a, b = _cmd("a"), _cmd("b")
        declare_flag(a, "name", "n")
        declare_flag(b, "name", "n")
        assert a.find_flag("name") == b.find_flag("name")

    @pytest.mark.parametrize("name", ["", "--name"])
    def test_invalid_name_rejected(self, name: str) -> None:
        with pytest.raises(CommandTreeError, match="Invalid flag name"):
            declare_flag(_cmd("x"), name)

    @pytest.mark.parametrize("short", ["", "nm", "-"])
    def test_invalid_short_rejected(self, short: str) -> None:
        with pytest.raises(CommandTreeError, match="single character"):
            declare_flag(_cmd("x"), "name", short)

    @pytest.mark.parametrize(("name", "short"), [("help", None), ("host", "h")])
    def test_help_flag_reserved(self, name: str, short: str | None) -> None:
        with pytest.raises(CommandTreeError, match="reserved"):
            declare_flag(_cmd("x"), name, short)


# ---------------------------------------------------------------------------
# walk
# ---------------------------------------------------------------------------

class TestWalk:
    def test_single_node(self) -> None:
        root = _cmd("root")
        assert list(walk(root)) == [root]

    def test_depth_first_order(self) -> None:
        root = _cmd("root")
        a = register(root, _cmd("a"))
        register(a, _cmd("a1"))
        register(root, _cmd("b"))

        assert [c.name for c in walk(root)] == ["root", "a", "a1", "b"]
