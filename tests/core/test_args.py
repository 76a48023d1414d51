import pytest

from ua_testserver.core.args import MAX_ARGUMENTS, match_flag, parse_arguments
from ua_testserver.core.errors import ArgumentCountError, UnknownFlagError, ValueTooLongError
from ua_testserver.core.models import MAX_STRING_LENGTH


def test_parse_uri_and_port_leaves_defaults():
    rec = parse_arguments(["-au", "urn:test", "-p", "4840"])
    assert rec.application_uri == "urn:test"
    assert rec.port == "4840"
    assert rec.application_name == ""
    assert rec.capabilities_raw == ""
    assert rec.di_namespace_enabled is False


def test_parse_all_flags(full_args):
    rec = parse_arguments(full_args)
    assert rec.application_uri == "urn:t"
    assert rec.application_name == "srv"
    assert rec.capabilities_raw == "cap1:cap2"
    assert rec.port == "4840"
    assert rec.di_namespace_enabled is True


def test_last_write_wins():
    rec = parse_arguments(["-an", "first", "-an", "second"])
    assert rec.application_name == "second"


def test_di_only_enabled_by_exact_on():
    assert parse_arguments(["-d", "on"]).di_namespace_enabled is False
    assert parse_arguments(["-d", "ON", "-d", "OFF"]).di_namespace_enabled is False


def test_unknown_flag_keeps_earlier_fields():
    with pytest.raises(UnknownFlagError) as err:
        parse_arguments(["-au", "urn:a", "-x", "y", "-p", "4840"])
    assert err.value.index == 2
    assert err.value.flag == "-x"
    assert err.value.record.application_uri == "urn:a"
    assert err.value.record.port is None


def test_unknown_single_flag():
    with pytest.raises(UnknownFlagError):
        parse_arguments(["-x", "y"])


def test_flag_without_value_is_count_error():
    with pytest.raises(ArgumentCountError) as err:
        parse_arguments(["-au"])
    assert err.value.index == 0
    assert err.value.flag == "-au"


def test_empty_and_too_many():
    with pytest.raises(ArgumentCountError):
        parse_arguments([])
    with pytest.raises(ArgumentCountError):
        parse_arguments(["-p", "1"] * (MAX_ARGUMENTS // 2) + ["-p"])


def test_max_arguments_accepted():
    rec = parse_arguments(["-p", "1", "-p", "2", "-p", "3", "-p", "4", "-p", "5"])
    assert rec.port == "5"


def test_non_flag_pair_is_ignored():
    rec = parse_arguments(["extra", "-x", "-p", "4840"])
    assert rec.port == "4840"


def test_trailing_non_flag_token_is_ignored():
    assert parse_arguments(["-p", "4840", "extra"]).port == "4840"


def test_value_too_long():
    with pytest.raises(ValueTooLongError) as err:
        parse_arguments(["-an", "x" * (MAX_STRING_LENGTH + 1)])
    assert err.value.field == "application_name"
    assert err.value.index == 1

    with pytest.raises(ValueTooLongError):
        parse_arguments(["-p", "123456"])


def test_match_flag_prefix_rules():
    assert match_flag("-au") == "application_uri"
    assert match_flag("-an") == "application_name"
    assert match_flag("-cap") == "capabilities_raw"
    assert match_flag("-port") == "port"
    assert match_flag("-a") is None
    assert match_flag("-ax") is None
    assert match_flag("-") is None
