"""User-Agent construction for wiki API requests.

Wiki operators ask automated clients to identify themselves: the agent name
must say it is a bot, carry a SemVer version, and ideally a way to reach the
owner. The library's own name and version are always appended.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import semver

from .metadata import LIBRARY, LIBRARY_NAME, LIBRARY_VERSION

MAX_FIELD_LENGTH = 256
WRAPPED_CONTACT_RE = re.compile(r"\((.+)\)")

Contact = Optional[Union[str, Sequence[str]]]


@dataclass(frozen=True)
class UserAgentOptions:
    name: str
    version: str
    contact: Contact = None


DEFAULT_USER_AGENT = UserAgentOptions(
    name=f"{LIBRARY.name} bot for Python",
    version=LIBRARY.version,
    contact=(LIBRARY.repository, LIBRARY.maintainer),
)


def normalize_contact(contact: object) -> object:
    """Collapse the accepted contact shapes into one string.

    Values that are neither ``None``, a string, nor a sequence of strings are
    returned untouched so validation can reject them.
    """
    if contact is None:
        return ""
    if isinstance(contact, str):
        match = WRAPPED_CONTACT_RE.fullmatch(contact)
        return match.group(1) if match else contact
    if isinstance(contact, (list, tuple)) and all(isinstance(item, str) for item in contact):
        return "; ".join(contact)
    return contact


def _validate(name: object, version: object, contact: object) -> None:
    if not isinstance(name, str):
        raise TypeError(f"user_agent.name: Expected str; received {type(name).__name__}.")
    if len(name) > MAX_FIELD_LENGTH:
        raise ValueError(f"user_agent.name: Max length is {MAX_FIELD_LENGTH}; received {len(name)}.")
    if "bot" not in name.lower():
        raise ValueError("user_agent.name: Name must include the phrase 'bot'.")

    if not isinstance(version, str):
        raise TypeError(f"user_agent.version: Expected str; received {type(version).__name__}.")
    if not semver.Version.is_valid(version):
        raise ValueError(f"user_agent.version: {version!r} is not a valid SemVer string.")

    if not isinstance(contact, str):
        raise TypeError(
            f"user_agent.contact: Expected str, sequence of str, or None; received {type(contact).__name__}."
        )
    if len(contact) > MAX_FIELD_LENGTH:
        raise ValueError(f"user_agent.contact: Max length is {MAX_FIELD_LENGTH}; received {len(contact)}.")


def build_user_agent(options: UserAgentOptions) -> str:
    contact = normalize_contact(options.contact)
    _validate(options.name, options.version, contact)
    contact_segment = f"({contact}) " if contact else ""
    return f"{options.name}/{options.version} {contact_segment}{LIBRARY_NAME}/{LIBRARY_VERSION}"


__all__ = [
    "DEFAULT_USER_AGENT",
    "MAX_FIELD_LENGTH",
    "UserAgentOptions",
    "build_user_agent",
    "normalize_contact",
]
