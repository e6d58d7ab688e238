"""
Target domain objects for testdrive.

A Target is one package the user asked to test drive. It has a kind
(a CocoaPods name to look up, or a repository URL to clone directly)
and a checkout directive telling which revision to check out.

Both kinds and directives are closed sets of small immutable variants.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union

from ..exit_codes import InvalidPlatformError


@dataclass(frozen=True)
class NamedPackage:
    """A package referenced by its pod name."""
    name: str


@dataclass(frozen=True)
class RepositoryURL:
    """A package referenced by the URL of its source repository."""
    url: str


@dataclass(frozen=True)
class LatestRelease:
    """Check out the highest released version, or the default branch."""


@dataclass(frozen=True)
class DefaultBranch:
    """Check out the default branch."""


@dataclass(frozen=True)
class Explicit:
    """Check out a user-supplied tag, branch or commit as-is."""
    ref: str


TargetKind = Union[NamedPackage, RepositoryURL]
CheckoutDirective = Union[LatestRelease, DefaultBranch, Explicit]


@dataclass(frozen=True)
class Target:
    """One requested package together with its checkout directive."""
    kind: TargetKind
    directive: CheckoutDirective = field(default_factory=LatestRelease)

    def with_directive(self, directive: CheckoutDirective) -> 'Target':
        """Return a copy of this target using another checkout directive."""
        return replace(self, directive=directive)


class Platform(Enum):
    """Playground platforms, in the order Xcode lists them."""
    IOS = "ios"
    MACOS = "macos"
    TVOS = "tvos"

    @classmethod
    def parse(cls, text: str) -> 'Platform':
        """
        Match a platform name case-insensitively.

        Raises:
            InvalidPlatformError: If the name is not a known platform
        """
        try:
            return cls(text.lower())
        except ValueError:
            raise InvalidPlatformError(text) from None

    @classmethod
    def default(cls) -> 'Platform':
        return next(iter(cls))

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def framework(self) -> str:
        """Framework imported at the top of a new playground."""
        return "Cocoa" if self is Platform.MACOS else "UIKit"


_DISPLAY_NAMES = {
    Platform.IOS: "iOS",
    Platform.MACOS: "macOS",
    Platform.TVOS: "tvOS",
}


def platform_or_default(name: Optional[str]) -> Platform:
    """Parse an optional platform name, falling back to the first platform."""
    if not name:
        return Platform.default()
    return Platform.parse(name)
