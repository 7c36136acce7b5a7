"""Session-guarded initial data loading for protected pages."""

import logging
from dataclasses import dataclass, field

from smart_recipe.adapters.rest_client import RestClient
from smart_recipe.domain.results import Err, Ok, Result
from smart_recipe.domain.sessions import RequestContext
from smart_recipe.services.sessions import SessionResolver

logger = logging.getLogger(__name__)

LANDING_DESTINATION = "/"


@dataclass(frozen=True)
class PageRedirect:
    """Instruction to send the visitor elsewhere instead of rendering."""

    destination: str = LANDING_DESTINATION
    permanent: bool = False


@dataclass(frozen=True)
class PageProps:
    """Initial data handed to a protected page."""

    props: dict[str, object] = field(default_factory=dict)


@dataclass
class DataGate:
    """Load a protected page's initial props through the internal API."""

    resolver: SessionResolver
    rest_client: RestClient
    api_base_url: str

    async def load_initial_props(
        self,
        context: RequestContext,
        resource_path: str,
        result_key: str = "recipes",
    ) -> PageRedirect | PageProps:
        """Return a redirect for anonymous visitors, otherwise the page props.

        Fetch failures degrade to an empty list under ``result_key``.
        """
        try:
            session = self.resolver.resolve(context)
        except Exception:
            logger.exception(
                "Session lookup failed while loading %s",
                result_key,
                extra={"resource_path": resource_path, "result_key": result_key},
            )
            return PageProps(props={result_key: []})
        if session is None:
            return PageRedirect()

        result = await self._fetch(context, resource_path)
        if isinstance(result, Err):
            logger.error(
                "Failed to fetch %s from %s: %s",
                result_key,
                resource_path,
                result.reason,
                extra={"resource_path": resource_path, "result_key": result_key},
            )
            return PageProps(props={result_key: []})
        return PageProps(props={result_key: result.value})

    async def _fetch(
        self, context: RequestContext, resource_path: str
    ) -> Result[object]:
        address = f"{self.api_base_url.rstrip('/')}/{resource_path.lstrip('/')}"
        try:
            data = await self.rest_client.call(
                address, headers={"Cookie": context.cookie_header}
            )
        except Exception as exc:
            return Err(reason=f"{type(exc).__name__}: {exc}", error=exc)
        return Ok(data)
