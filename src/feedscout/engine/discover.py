"""Discovery pipeline: normalize input, generate candidates, validate them.

The pipeline is shared by the feed and blogroll products. Each product only
contributes its default option tables and its extractor; everything else
(input normalization, candidate aggregation, concurrent validation and
result filtering) happens here.
"""

import dataclasses
import inspect
from collections.abc import Mapping
from typing import Any, Generic, Sequence

import httpx
import structlog

from feedscout.core.exceptions import MalformedUriError
from feedscout.core.models import (
    METHOD_NAMES,
    DiscoverInput,
    DiscoverOptions,
    DiscoverResult,
    ExtractFn,
    ExtractInput,
    FetchFn,
    InputData,
    InvalidResult,
    MethodsConfig,
    MethodsDefaults,
    MethodsPlan,
    NormalizedInput,
    NormalizeUrlFn,
    Progress,
    T,
)
from feedscout.core.urls import normalize_url
from feedscout.discovery import discover_uris
from feedscout.engine.executor import process_concurrently

logger = structlog.get_logger(__name__)


async def normalize_input(
    input: DiscoverInput,
    fetch_fn: FetchFn,
    normalize_url_fn: NormalizeUrlFn = normalize_url,
) -> NormalizedInput:
    """Turn a discovery input into the shape every generator consumes.

    A plain URL is fetched once and its final URL, body and headers are
    used. Pre-supplied data is taken as is, without network access.

    Args:
        input: URL string or pre-fetched ``InputData``.
        fetch_fn: Fetch function used for plain URLs.
        normalize_url_fn: Canonicalizer applied to the page URL.

    Returns:
        The normalized input.

    Raises:
        MalformedUriError: If the page URL cannot be normalized.
    """
    if isinstance(input, InputData):
        headers = input.headers
        if headers is not None and not isinstance(headers, httpx.Headers):
            headers = httpx.Headers(headers)
        return NormalizedInput(
            url=normalize_url_fn(input.url, None),
            content=input.content,
            headers=headers,
        )

    response = await fetch_fn(normalize_url_fn(input, None))
    return NormalizedInput(
        url=normalize_url_fn(response.url, None),
        content=response.body,
        headers=response.headers,
    )


def _resolve_method_options(name: str, value: Any, default: Any) -> Any:
    if value is True:
        return default
    if isinstance(value, type(default)):
        return value
    if isinstance(value, Mapping):
        overrides = {
            key: tuple(item) if isinstance(item, (list, set)) else item
            for key, item in value.items()
        }
        return dataclasses.replace(default, **overrides)
    raise TypeError(
        f"Options for method {name!r} must be True, a mapping or "
        f"{type(default).__name__}, got {type(value).__name__}"
    )


def build_methods_plan(methods: MethodsConfig, defaults: MethodsDefaults) -> MethodsPlan:
    """Resolve a methods config into per-method options.

    Args:
        methods: Sequence of method names, or a mapping of method name to
            ``True``, an options instance or a dict of field overrides.
            Falsy mapping values disable the method.
        defaults: Product defaults the config is merged over.

    Returns:
        Options for every enabled method; disabled methods stay ``None``.

    Raises:
        ValueError: If a method name is unknown.
        TypeError: If a method's options have the wrong type.
    """
    if isinstance(methods, str):
        methods = [methods]
    if not isinstance(methods, Mapping):
        methods = {name: True for name in methods}

    plan = MethodsPlan()
    for name, value in methods.items():
        if name not in METHOD_NAMES:
            raise ValueError(
                f"Unknown discovery method: {name!r} (expected one of {', '.join(METHOD_NAMES)})"
            )
        if not value:
            continue
        default = getattr(defaults, name)
        setattr(plan, name, _resolve_method_options(name, value, default))

    return plan


def _drop_unavailable_methods(plan: MethodsPlan, data: NormalizedInput) -> None:
    if plan.html is not None and data.content is None:
        logger.warning("Skipping html method, no page content available", url=data.url)
        plan.html = None
    if plan.headers is not None and data.headers is None:
        logger.warning("Skipping headers method, no response headers available", url=data.url)
        plan.headers = None


async def _extract(extract_fn: ExtractFn, data: ExtractInput) -> DiscoverResult:
    result = extract_fn(data)
    if inspect.isawaitable(result):
        result = await result
    return result


class DiscoveryRun(Generic[T]):
    """A single discovery call over one input."""

    def __init__(
        self,
        options: DiscoverOptions,
        defaults: MethodsDefaults,
        default_methods: Sequence[str] = METHOD_NAMES,
    ) -> None:
        """Initialize the run.

        Args:
            options: Caller options. ``fetch_fn`` and ``extract_fn`` must be set.
            defaults: Product defaults for each method.
            default_methods: Methods enabled when ``options.methods`` is unset.

        Raises:
            ValueError: If ``fetch_fn`` or ``extract_fn`` is missing.
        """
        if options.fetch_fn is None:
            raise ValueError("fetch_fn is required")
        if options.extract_fn is None:
            raise ValueError("extract_fn is required")

        self._options = options
        self._defaults = defaults
        self._default_methods = tuple(default_methods)
        self._fetch_fn: FetchFn = options.fetch_fn
        self._extract_fn: ExtractFn = options.extract_fn
        self._normalize_url_fn: NormalizeUrlFn = options.normalize_url_fn or normalize_url

        self._results: list[DiscoverResult] = []
        self._tested = 0
        self._found = 0

    async def run(self, input: DiscoverInput) -> list[DiscoverResult]:
        """Discover and validate resources for an input.

        Returns:
            Results in completion order; invalid ones only when
            ``include_invalid`` is set.
        """
        data = await normalize_input(input, self._fetch_fn, self._normalize_url_fn)

        # Input that already is the resource short-circuits discovery
        if data.content:
            result = await self._extract_safely(ExtractInput(data.url, data.content, data.headers))
            if result.is_valid:
                logger.debug("Input is already a valid resource", url=data.url)
                return [result]

        uris = self.collect_candidates(data)
        logger.debug("Collected candidates", url=data.url, count=len(uris))

        async def validate(uri: str) -> None:
            await self._validate(uri, data, total=len(uris))

        await process_concurrently(
            uris,
            validate,
            concurrency=self._options.concurrency,
            should_stop=lambda: self._options.stop_on_first and self._found > 0,
        )

        if self._options.include_invalid:
            return list(self._results)
        return [result for result in self._results if result.is_valid]

    def collect_candidates(self, data: NormalizedInput) -> list[str]:
        """Generate, normalize and de-duplicate candidate URIs.

        Caller-supplied ``additional_uris`` come first, followed by the
        generated ones. Candidates that cannot be normalized are dropped.
        """
        plan = build_methods_plan(
            self._options.methods if self._options.methods is not None else self._default_methods,
            self._defaults,
        )
        _drop_unavailable_methods(plan, data)

        candidates: dict[str, None] = {}
        for uri in [*self._options.additional_uris, *discover_uris(plan, data)]:
            try:
                normalized = self._normalize_url_fn(uri, data.url)
            except MalformedUriError as e:
                logger.debug("Dropping malformed candidate", uri=uri, reason=e.reason)
                continue
            candidates.setdefault(normalized, None)

        return list(candidates)

    async def _extract_safely(self, data: ExtractInput) -> DiscoverResult:
        try:
            return await _extract(self._extract_fn, data)
        except Exception as e:
            logger.debug("Extractor failed", url=data.url, error=str(e))
            return InvalidResult(url=data.url, error=e)

    async def _validate(self, uri: str, data: NormalizedInput, total: int) -> None:
        try:
            if uri == data.url and data.content is not None:
                extract_input = ExtractInput(uri, data.content, data.headers)
            else:
                response = await self._fetch_fn(uri)
                extract_input = ExtractInput(response.url, response.body, response.headers)
            result = await _extract(self._extract_fn, extract_input)
        except Exception as e:
            logger.debug("Candidate validation failed", uri=uri, error=str(e))
            result = InvalidResult(url=uri, error=e)

        self._results.append(result)
        self._tested += 1
        if result.is_valid:
            self._found += 1
            logger.debug("Found resource", uri=result.url)

        if self._options.on_progress is not None:
            self._options.on_progress(
                Progress(tested=self._tested, total=total, found=self._found, current=uri)
            )


async def discover(
    input: DiscoverInput,
    options: DiscoverOptions,
    defaults: MethodsDefaults,
    default_methods: Sequence[str] = METHOD_NAMES,
) -> list[DiscoverResult]:
    """Run one discovery call.

    Args:
        input: URL string or pre-fetched ``InputData``.
        options: Caller options with ``fetch_fn`` and ``extract_fn`` set.
        defaults: Product defaults for each method.
        default_methods: Methods enabled when ``options.methods`` is unset.

    Returns:
        Discovery results in completion order.
    """
    return await DiscoveryRun(options, defaults, default_methods).run(input)
