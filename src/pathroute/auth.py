"""Page access decisions from an optional ``authenticate`` export.

A page module may export ``authenticate(session)``, sync or async.  Its
result is read as a three-way decision::

    True            -> permit the render
    "/login"        -> redirect to that location
    False / None    -> deny (render the notAuthorized role)

Acting on the decision belongs to the host; this module only interprets it.
"""

import inspect
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pathroute.routing.route import module_member


class AccessDecision(StrEnum):
    PERMIT = "permit"
    REDIRECT = "redirect"
    DENY = "deny"


@dataclass(frozen=True, slots=True)
class AccessResult:
    """Outcome of a page's ``authenticate`` hook.

    Attributes:
        decision: Permit, redirect, or deny.
        location: Redirect target; set only for ``REDIRECT``.
    """

    decision: AccessDecision
    location: str | None = None

    @property
    def permitted(self) -> bool:
        return self.decision is AccessDecision.PERMIT


PERMITTED = AccessResult(AccessDecision.PERMIT)
DENIED = AccessResult(AccessDecision.DENY)


def interpret(result: Any) -> AccessResult:
    """Map an ``authenticate`` return value onto an :class:`AccessResult`."""
    if result is True:
        return PERMITTED
    if isinstance(result, str) and result:
        return AccessResult(AccessDecision.REDIRECT, location=result)
    return DENIED


async def check_access(module: Any, session: Any) -> AccessResult:
    """Run *module*'s ``authenticate`` hook for *session*, if it has one.

    Modules without the hook are always permitted.
    """
    authenticate = module_member(module, "authenticate")
    if authenticate is None or not callable(authenticate):
        return PERMITTED
    result = authenticate(session)
    if inspect.isawaitable(result):
        result = await result
    return interpret(result)
