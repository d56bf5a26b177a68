"""Intent to provider routing."""

from collections.abc import Iterable, Mapping

from civic_evidence.data import Intent

# Provider order within a route is the order evidence appears in the bundle.
DEFAULT_ROUTES: dict[Intent, tuple[str, ...]] = {
    Intent.LAW: ("india_code", "prs"),
    Intent.REPRESENTATIVE: ("myneta", "eci"),
    Intent.FACT_CHECK: ("pib",),
    Intent.GRIEVANCE: ("data_gov",),
    Intent.GENERAL: ("data_gov",),
}


class RoutingError(ValueError):
    """Raised when a routing table is not total over intents and providers."""


def validate_routes(
    routes: Mapping[Intent, tuple[str, ...]],
    provider_names: Iterable[str],
) -> dict[Intent, tuple[str, ...]]:
    """Check that every intent routes to at least one registered provider.

    Args:
        routes: Mapping of intent to ordered provider names.
        provider_names: Names of the registered providers.

    Returns:
        A copy of ``routes`` with tuple values.

    Raises:
        RoutingError: If an intent is missing, routes to nothing, or names an
            unregistered provider.
    """
    known = set(provider_names)
    validated: dict[Intent, tuple[str, ...]] = {}
    for intent in Intent:
        names = tuple(routes.get(intent, ()))
        if not names:
            raise RoutingError(f"No providers routed for intent '{intent}'")
        unknown = [n for n in names if n not in known]
        if unknown:
            msg = f"Intent '{intent}' routes to unregistered providers: {', '.join(unknown)}"
            raise RoutingError(msg)
        validated[intent] = names
    return validated
