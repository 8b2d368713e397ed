import pytest

from tapper.exceptions import ConstraintViolationError, CountMismatchError
from tapper.parser import AllOf, Argument, ArgumentGroup, NoneOf, ValueArgument


def test_group_lists_each_argument_once():
    a, b = Argument("a"), Argument("b")
    group = ArgumentGroup("Options", a, b, a)
    assert group.name == "Options"
    assert [arg.usage for arg in group.arguments] == ["-a", "-b"]
    assert len(group) == 3


def test_group_flattens_constraints():
    a, b, c = Argument("a"), Argument("b"), Argument("c")
    group = ArgumentGroup("Mode", a)
    assert [arg.usage for arg in group.arguments] == ["-a"]

    group.add(b ^ c)
    group.add(a & c)
    assert [arg.usage for arg in group.arguments] == ["-a", "-b", "-c"]
    assert group.usage == "[ -a ] ( -b | -c ) [ -a -c ]"


def test_group_arguments_share_state():
    a = ValueArgument("o")
    group = ArgumentGroup("Output", a)
    group.arguments[0].set("x")
    assert a.value == "x"


def test_group_validation_is_optional():
    a, b = Argument("a"), Argument("b")
    group = ArgumentGroup("Options", a, b)
    group.validate()
    assert group.count == 0
    assert not group.required


def test_group_validates_required_members():
    group = ArgumentGroup("Options", Argument("a"), +Argument("b"))
    with pytest.raises(CountMismatchError, match="Argument -b is required"):
        group.validate()


def test_group_clone_rebuilds_member_list():
    a, b = Argument("a"), Argument("b")
    group = ArgumentGroup("Options", a)
    assert len(group.arguments) == 1
    clone = group.clone()
    clone.add(b)
    assert len(clone.arguments) == 2
    assert len(group.arguments) == 1
    assert repr(clone) == "ArgumentGroup('Options', arguments=2)"


def test_group_validates_unset_constraints():
    a, b = Argument("a"), Argument("b")
    group = ArgumentGroup("Constraints", AllOf(+a, b))
    with pytest.raises(CountMismatchError, match="Argument -a is required"):
        group.validate()


def test_group_reports_required_constraint_left_unset():
    a = Argument("a")
    group = ArgumentGroup("Constraints", NoneOf(a).set_required())
    with pytest.raises(ConstraintViolationError) as excinfo:
        group.validate()
    assert str(excinfo.value) == "The following required arguments are missing: !-a"
