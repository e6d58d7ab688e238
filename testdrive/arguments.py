"""
Argument resolution for testdrive.

Turns the raw command-line tokens into an ordered list of targets and a
playground platform. Flags that modify a target (``-v``/``--version`` and
``-m``/``--master``) apply to the target declared just before them; with
no such target they are ignored.

The parser is a small state machine over the token stream so that a
platform or version flag always consumes exactly the next token.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from .domain.target import (
    Target,
    TargetKind,
    NamedPackage,
    RepositoryURL,
    DefaultBranch,
    Explicit,
    CheckoutDirective,
    Platform,
)
from .exit_codes import InvalidURLError, MissingPlatformError
from .utils import REPOSITORY_SUFFIX, HOSTING_DOMAIN, is_valid_url, canonical_hosting_url

PLATFORM_FLAGS = ("--platform", "-p")
VERSION_FLAGS = ("--version", "-v")
MASTER_FLAGS = ("--master", "-m")


class ParserState(Enum):
    NORMAL = "normal"
    EXPECTING_PLATFORM = "expecting-platform"
    EXPECTING_CHECKOUT = "expecting-checkout"


@dataclass
class Arguments:
    """Result of parsing the command line."""
    targets: List[Target] = field(default_factory=list)
    platform: Optional[Platform] = None

    def attach_to_last_target(self, directive: CheckoutDirective) -> bool:
        """
        Replace the directive of the most recently added target.

        Returns:
            False when there is no target yet (the directive is dropped)
        """
        if not self.targets:
            return False
        self.targets[-1] = self.targets[-1].with_directive(directive)
        return True


def target_kind_from(token: str) -> TargetKind:
    """
    Classify a positional token.

    Raises:
        InvalidURLError: If the token looks like a URL but cannot be parsed
    """
    if token.endswith(REPOSITORY_SUFFIX):
        if not is_valid_url(token):
            raise InvalidURLError(token)
        return RepositoryURL(token)

    if HOSTING_DOMAIN in token:
        url = canonical_hosting_url(token)
        if not is_valid_url(url):
            raise InvalidURLError(token)
        return RepositoryURL(url)

    return NamedPackage(token)


def parse_arguments(tokens: Iterable[str]) -> Arguments:
    """
    Parse command-line tokens into targets and a platform.

    Args:
        tokens: Raw tokens, without the program name

    Returns:
        Arguments with targets in the order they were given

    Raises:
        InvalidPlatformError: If the platform flag names an unknown platform
        MissingPlatformError: If the platform flag is the last token
        InvalidURLError: If a URL-like token cannot be parsed
    """
    arguments = Arguments()
    state = ParserState.NORMAL
    pending_flag = ""

    for token in tokens:
        if state is ParserState.EXPECTING_PLATFORM:
            arguments.platform = Platform.parse(token)
            state = ParserState.NORMAL
            continue

        if state is ParserState.EXPECTING_CHECKOUT:
            arguments.attach_to_last_target(Explicit(token))
            state = ParserState.NORMAL
            continue

        if token in PLATFORM_FLAGS:
            state = ParserState.EXPECTING_PLATFORM
            pending_flag = token
        elif token in VERSION_FLAGS:
            state = ParserState.EXPECTING_CHECKOUT
        elif token in MASTER_FLAGS:
            arguments.attach_to_last_target(DefaultBranch())
        else:
            arguments.targets.append(Target(kind=target_kind_from(token)))

    # A trailing version flag without a ref has nothing to attach
    if state is ParserState.EXPECTING_PLATFORM:
        raise MissingPlatformError(pending_flag)

    return arguments
