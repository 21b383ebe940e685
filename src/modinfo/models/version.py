"""Lenient semantic version value type for modlet versions.

Mod authors write versions such as ``"1"``, ``"v2.1"``, ``"1_0_3"`` or
``"1.2.3.4"``. These are accepted and normalized to a strict
``major.minor.patch[-prerelease][+build]`` value.

Parsing rules, applied in order:

1. Surrounding whitespace is stripped; empty input is rejected.
2. One leading ``v``/``V`` is dropped.
3. Up to three numeric components separated by ``.`` or ``_``; missing
   components become 0 and leading zeros are ignored.
4. Extra numeric components go to build metadata (``1.2.3.4`` -> ``1.2.3+4``).
5. A pre-release starts at ``-``, directly at a letter (``1.2beta``), or at a
   ``.``/``_`` followed by a letter (``1.2.3.rc1``).
6. Build metadata starts at ``+``.
7. Pre-release/build identifiers are dot-separated ``[0-9A-Za-z-]+``;
   ``_`` is read as ``.``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from functools import total_ordering
from typing import Any

from modinfo.errors import InvalidVersionError

_NUMERIC = re.compile(r"\d+")
_EXTRA_NUMERIC = re.compile(r"[._](\d+)")
_IDENTIFIER = re.compile(r"^[0-9A-Za-z-]+$")
_SEPARATORS = "._"


def _split_identifiers(text: str, what: str, original: str) -> str:
    """Normalize and check a pre-release or build section.

    Numeric pre-release identifiers lose their leading zeros (``01`` -> ``1``);
    build identifiers are kept as written.
    """
    normalized = text.replace("_", ".")
    parts = normalized.split(".")
    for index, part in enumerate(parts):
        if not _IDENTIFIER.match(part):
            raise InvalidVersionError(
                original, f"{what} identifier '{part}' must match [0-9A-Za-z-]+"
            )
        if what == "pre-release" and part.isdigit():
            parts[index] = str(int(part))
    return ".".join(parts)


def _compare_prerelease(left: str, right: str) -> int:
    """Compare two pre-release strings by semver precedence rules."""
    left_ids = left.split(".")
    right_ids = right.split(".")

    for a, b in zip(left_ids, right_ids):
        if a == b:
            continue
        a_num, b_num = a.isdigit(), b.isdigit()
        if a_num and b_num:
            if int(a) != int(b):
                return -1 if int(a) < int(b) else 1
            # equal values spelled differently (01 and 1)
            return -1 if a < b else 1
        # numeric identifiers always have lower precedence
        if a_num:
            return -1
        if b_num:
            return 1
        return -1 if a < b else 1

    if len(left_ids) == len(right_ids):
        return 0
    return -1 if len(left_ids) < len(right_ids) else 1


@total_ordering
@dataclass(frozen=True)
class Version:
    """Semantic version of a modlet.

    Attributes:
    ----------
        major: Major version number.
        minor: Minor version number.
        patch: Patch version number.
        prerelease: Dot-separated pre-release identifiers, if any.
        build: Dot-separated build metadata, if any.

    Example:
    -------
        >>> Version.parse("v1.2") == Version(1, 2, 0)
        True
        >>> str(Version.parse("1.2.3beta"))
        '1.2.3-beta'

    """

    major: int = 0
    minor: int = 0
    patch: int = 0
    prerelease: str | None = None
    build: str | None = None

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a version string leniently.

        Args:
        ----
            text: Version string as written in a descriptor.

        Returns:
        -------
            Normalized Version.

        Raises:
        ------
            InvalidVersionError: If the text cannot be read as a version.

        """
        return parse_version(text)

    def __str__(self) -> str:
        """Return the canonical ``major.minor.patch[-pre][+build]`` form."""
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text

    def __lt__(self, other: object) -> bool:
        """Order by semver precedence, build metadata breaking ties."""
        if not isinstance(other, Version):
            return NotImplemented

        core_self = (self.major, self.minor, self.patch)
        core_other = (other.major, other.minor, other.patch)
        if core_self != core_other:
            return core_self < core_other

        if self.prerelease != other.prerelease:
            if self.prerelease is None:
                return False
            if other.prerelease is None:
                return True
            return _compare_prerelease(self.prerelease, other.prerelease) < 0

        return (self.build or "") < (other.build or "")

    @property
    def is_prerelease(self) -> bool:
        """Whether this version carries pre-release identifiers."""
        return self.prerelease is not None

    def bump_major(self) -> Version:
        """Return the next major version, dropping pre-release and build."""
        return Version(self.major + 1, 0, 0)

    def bump_minor(self) -> Version:
        """Return the next minor version, dropping pre-release and build."""
        return Version(self.major, self.minor + 1, 0)

    def bump_patch(self) -> Version:
        """Return the next patch version, dropping pre-release and build."""
        return Version(self.major, self.minor, self.patch + 1)

    def with_prerelease(self, prerelease: str | None) -> Version:
        """Return a copy with the given pre-release identifiers."""
        if prerelease is not None:
            prerelease = _split_identifiers(prerelease, "pre-release", prerelease)
        return replace(self, prerelease=prerelease)

    def with_build(self, build: str | None) -> Version:
        """Return a copy with the given build metadata."""
        if build is not None:
            build = _split_identifiers(build, "build", build)
        return replace(self, build=build)


def parse_version(text: str) -> Version:
    """Parse a version string using the lenient rules of this module.

    Args:
    ----
        text: Version string.

    Returns:
    -------
        Parsed Version.

    Raises:
    ------
        InvalidVersionError: If no version can be read.

    Examples:
    --------
        >>> parse_version("1")
        Version(major=1, minor=0, patch=0, prerelease=None, build=None)
        >>> str(parse_version("1_2_3"))
        '1.2.3'
        >>> str(parse_version("1.2.3.4"))
        '1.2.3+4'

    """
    if not isinstance(text, str):
        raise InvalidVersionError(str(text), f"expected a string, got {type(text).__name__}")

    original = text
    rest = text.strip()
    if not rest:
        raise InvalidVersionError(original, "version is empty")

    if rest[0] in "vV":
        rest = rest[1:]

    match = _NUMERIC.match(rest)
    if match is None:
        raise InvalidVersionError(original, "must start with a number")

    numbers = [int(match.group())]
    rest = rest[match.end() :]

    # numeric core, then any extra numeric components
    extra_match = _EXTRA_NUMERIC.match(rest)
    while extra_match is not None:
        numbers.append(int(extra_match.group(1)))
        rest = rest[extra_match.end() :]
        extra_match = _EXTRA_NUMERIC.match(rest)

    major, minor, patch = (numbers + [0, 0])[:3]
    extra = [str(n) for n in numbers[3:]]

    prerelease: str | None = None
    build: str | None = None

    if rest:
        if rest[0] == "-":
            pre_text, _, build_text = rest[1:].partition("+")
            if not pre_text:
                raise InvalidVersionError(original, "empty pre-release")
            prerelease = pre_text
            build = build_text if "+" in rest else None
        elif rest[0] == "+":
            build = rest[1:]
        elif rest[0].isalpha() or (
            len(rest) > 1 and rest[0] in _SEPARATORS and rest[1].isalpha()
        ):
            pre_text = rest if rest[0].isalpha() else rest[1:]
            pre_text, sep, build_text = pre_text.partition("+")
            prerelease = pre_text
            build = build_text if sep else None
        else:
            raise InvalidVersionError(original, f"unexpected text '{rest}'")

    if prerelease is not None:
        prerelease = _split_identifiers(prerelease, "pre-release", original)
    if build is not None:
        if not build:
            raise InvalidVersionError(original, "empty build metadata")
        build = _split_identifiers(build, "build", original)

    if extra:
        build = ".".join(extra + ([build] if build else []))

    return Version(major, minor, patch, prerelease, build)


def coerce_version(value: Any) -> Version:
    """Accept a Version or a version string (pydantic before-validator).

    Args:
    ----
        value: Version instance or string.

    Returns:
    -------
        Version instance.

    """
    if isinstance(value, Version):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = str(value)
    return parse_version(value)
