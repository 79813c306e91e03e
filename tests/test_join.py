"""Tests for the relational join."""

from dataclasses import dataclass

import pytest

from termappear.errors import JoinError
from termappear.util.join import FieldAccessible, Join, access, can_access, join


@dataclass
class Pane:
    pid: int
    session: str


@dataclass
class Proc:
    pid: int
    name: str


class Record:
    """A record that only exposes fields through get()."""

    def __init__(self, **fields):
        self._fields = fields

    def get(self, field):
        return self._fields.get(field)


THINGS = [{"prop": 1}, {"prop": 2}, {"prop": 3}, {"prop": "x"}]
OTHERS = [{"prop": 1, "foo": "bar"}, {"prop": 2, "foo": "quux"}, {"prop": "y", "foo": "dog"}]


class TestJoin:
    """Tests for join()."""

    def test_inner_join_keeps_values_in_every_table(self):
        joined = join("prop", THINGS, OTHERS)

        assert [j.prop for j in joined] == [1, 2]
        assert joined[0].foo == "bar"
        assert joined[1].foo == "quux"

    def test_earlier_tables_shadow_later_ones(self):
        a = [{"prop": 2, "foo": "A"}]
        b = [{"prop": 2, "foo": "B"}]

        assert join("prop", a, b)[0].foo == "A"
        assert join("prop", b, a)[0].foo == "B"

    def test_rejoin_matches_three_way_join(self):
        third = [{"prop": 2, "baz": 9}, {"prop": 3, "baz": 10}]

        nested = join("prop", join("prop", THINGS, OTHERS), third)
        flat = join("prop", THINGS, OTHERS, third)

        assert [j.prop for j in nested] == [j.prop for j in flat] == [2]
        assert nested[0].foo == flat[0].foo == "quux"
        assert nested[0].baz == flat[0].baz == 9

    def test_mixed_record_shapes(self):
        panes = [Pane(pid=10, session="work"), Pane(pid=11, session="play")]
        procs = [Proc(pid=11, name="zsh"), Record(pid=12, name="vim")]

        joined = join("pid", procs, panes)

        assert len(joined) == 1
        assert joined[0].name == "zsh"
        assert joined[0].session == "play"

    def test_none_values_never_join(self):
        a = [{"prop": None, "foo": 1}, {"prop": 1}]
        b = [{"prop": None, "foo": 2}, {"prop": 1}]

        assert [j.prop for j in join("prop", a, b)] == [1]

    def test_duplicate_rows_are_all_members(self):
        a = [{"prop": 1, "n": "a1"}, {"prop": 1, "n": "a2"}]
        b = [{"prop": 1, "n": "b1"}]

        joined = join("prop", a, b)

        assert len(joined) == 1
        assert [m["n"] for m in joined[0].members] == ["a1", "a2", "b1"]

    def test_value_missing_from_one_table_is_dropped(self):
        assert join("prop", THINGS, []) == []

    def test_single_table_join_is_identity_by_value(self):
        assert [j.prop for j in join("prop", THINGS)] == [1, 2, 3, "x"]

    def test_unsupported_record_raises(self):
        with pytest.raises(JoinError):
            join("prop", [object()], THINGS)


class TestJoinRecord:
    """Tests for reading through a Join."""

    def test_get_skips_none_values(self):
        joined = Join({"a": None}, {"a": 5})
        assert joined.get("a") == 5
        assert joined["a"] == 5

    def test_missing_attribute_raises_attribute_error(self):
        joined = Join(Pane(pid=1, session="s"))
        with pytest.raises(AttributeError):
            joined.nope

    def test_missing_key_in_mapping_reads_none(self):
        joined = Join({"a": 1})
        assert joined.nope is None

    def test_unjoin_returns_typed_member(self):
        pane = Pane(pid=1, session="s")
        joined = join("pid", [Proc(pid=1, name="zsh")], [pane])[0]

        assert joined.unjoin(lambda m: isinstance(m, Pane)) is pane
        assert joined.unjoin(lambda m: False) is None

    def test_join_is_field_accessible(self):
        assert isinstance(Join(), FieldAccessible)
        assert "Join(" in repr(Join({"a": 1}))


class TestAccess:
    """Tests for access() and can_access()."""

    def test_access_shapes(self):
        assert access({"a": 1}, "a") == 1
        assert access(Record(a=2), "a") == 2
        assert access(Proc(pid=3, name="x"), "pid") == 3

    def test_can_access(self):
        assert can_access({}, "anything")
        assert can_access(Proc(pid=1, name="x"), "name")
        assert not can_access(Proc(pid=1, name="x"), "session")

    def test_access_unsupported_raises(self):
        with pytest.raises(JoinError):
            access(Proc(pid=1, name="x"), "session")
