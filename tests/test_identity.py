from __future__ import annotations

import pytest

from holowiki.identity import DEFAULT_USER_AGENT, UserAgentOptions, build_user_agent, normalize_contact
from holowiki.metadata import LIBRARY_NAME, LIBRARY_VERSION

SUFFIX = f"{LIBRARY_NAME}/{LIBRARY_VERSION}"


def test_user_agent_without_contact_omits_parentheses() -> None:
    agent = build_user_agent(UserAgentOptions(name="abot", version="1.0.0", contact=None))
    assert agent == f"abot/1.0.0 {SUFFIX}"
    assert "(" not in agent
    assert agent.endswith(SUFFIX)


def test_contact_list_is_joined() -> None:
    options = UserAgentOptions(name="abot", version="1.0.0", contact=["https://example.com", "a@example.com"])
    assert normalize_contact(options.contact) == "https://example.com; a@example.com"
    assert build_user_agent(options) == f"abot/1.0.0 (https://example.com; a@example.com) {SUFFIX}"


def test_wrapped_contact_is_unwrapped_once() -> None:
    assert normalize_contact("(123-4567)") == "123-4567"
    assert normalize_contact("((123-4567))") == "(123-4567)"
    assert normalize_contact("123-4567") == "123-4567"


def test_contact_unwrapped_only_when_parentheses_span_whole_string() -> None:
    assert normalize_contact("(abc)\n") == "(abc)\n"
    assert normalize_contact("(a\nb)") == "(a\nb)"
    assert normalize_contact("(a) and (b)") == "a) and (b"


def test_empty_string_contact_omits_segment() -> None:
    assert build_user_agent(UserAgentOptions(name="MyBot", version="2.1.0", contact="")) == f"MyBot/2.1.0 {SUFFIX}"


@pytest.mark.parametrize("name", ["crawler", "B-O-T", "robo", ""])
def test_name_must_mention_bot(name: str) -> None:
    with pytest.raises(ValueError):
        build_user_agent(UserAgentOptions(name=name, version="1.0.0"))


@pytest.mark.parametrize("name", ["abot", "RoBoT", "BOT helper"])
def test_bot_check_is_case_insensitive(name: str) -> None:
    assert build_user_agent(UserAgentOptions(name=name, version="1.0.0")).startswith(f"{name}/1.0.0")


def test_name_length_limit() -> None:
    build_user_agent(UserAgentOptions(name="bot" + "x" * 253, version="1.0.0"))
    with pytest.raises(ValueError):
        build_user_agent(UserAgentOptions(name="bot" + "x" * 254, version="1.0.0"))


@pytest.mark.parametrize("version", ["1.0", "v1.0.0", "1.0.0.0", "latest", "01.0.0"])
def test_invalid_semver_rejected(version: str) -> None:
    with pytest.raises(ValueError):
        build_user_agent(UserAgentOptions(name="abot", version=version))


def test_prerelease_and_build_metadata_accepted() -> None:
    agent = build_user_agent(UserAgentOptions(name="abot", version="1.0.0-alpha.1+build.5"))
    assert agent.startswith("abot/1.0.0-alpha.1+build.5 ")


@pytest.mark.parametrize(
    "options",
    [
        UserAgentOptions(name=42, version="1.0.0"),  # type: ignore[arg-type]
        UserAgentOptions(name="abot", version=100),  # type: ignore[arg-type]
        UserAgentOptions(name="abot", version="1.0.0", contact=12345),  # type: ignore[arg-type]
        UserAgentOptions(name="abot", version="1.0.0", contact=["a@example.com", 7]),  # type: ignore[list-item]
    ],
)
def test_wrong_types_raise_type_error(options: UserAgentOptions) -> None:
    with pytest.raises(TypeError):
        build_user_agent(options)


def test_contact_length_limit() -> None:
    with pytest.raises(ValueError):
        build_user_agent(UserAgentOptions(name="abot", version="1.0.0", contact="x" * 257))


def test_default_user_agent_is_valid() -> None:
    agent = build_user_agent(DEFAULT_USER_AGENT)
    assert agent.startswith(f"{LIBRARY_NAME} bot for Python/{LIBRARY_VERSION} (")
    assert agent.endswith(SUFFIX)
