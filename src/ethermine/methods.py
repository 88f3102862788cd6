"""
Method tables and path construction.

Every API method belongs to exactly one :class:`MethodCategory`; the category
decides how the request path is built and whether the request is signed.
"""

from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Tuple, Union
from urllib.parse import quote

from .encoding import check_key
from .errors import EncodingError, MissingParameterError, UnknownMethodError
from .models import ClientConfig, MethodCategory, Route


MINER_PLACEHOLDER = ":miner"
WORKER_PLACEHOLDER = ":worker"

# Lookup order when resolving a method name.
RESOLUTION_ORDER: Tuple[MethodCategory, ...] = (
    MethodCategory.PUBLIC,
    MethodCategory.PRIVATE,
    MethodCategory.POOL,
    MethodCategory.MINER,
    MethodCategory.WORKER,
)

Params = Union[Mapping[str, Any], str, None]


class MethodTable:
    """Immutable mapping of method name to category."""

    def __init__(
        self,
        public: Iterable[str] = (),
        private: Iterable[str] = (),
        pool: Iterable[str] = (),
        miner: Iterable[str] = (),
        worker: Iterable[str] = (),
    ):
        lists = {
            MethodCategory.PUBLIC: tuple(public),
            MethodCategory.PRIVATE: tuple(private),
            MethodCategory.POOL: tuple(pool),
            MethodCategory.MINER: tuple(miner),
            MethodCategory.WORKER: tuple(worker),
        }
        lookup: Dict[str, MethodCategory] = {}
        for category in RESOLUTION_ORDER:
            for name in lists[category]:
                if name in lookup:
                    raise ValueError(
                        f"{name} is listed as both {lookup[name].value} and {category.value}"
                    )
                lookup[name] = category
        self._lists = MappingProxyType(lists)
        self._lookup = MappingProxyType(lookup)

    def resolve(self, method: str) -> MethodCategory:
        try:
            return self._lookup[method]
        except (KeyError, TypeError):
            raise UnknownMethodError(str(method)) from None

    def names(self, category: MethodCategory) -> Tuple[str, ...]:
        return self._lists[category]

    def extend(self, **extra: Iterable[str]) -> "MethodTable":
        """Return a new table with ``extra`` names added per category."""
        merged = {
            category.value: self._lists[category] + tuple(extra.pop(category.value, ()))
            for category in RESOLUTION_ORDER
        }
        if extra:
            raise TypeError(f"Unknown method categories: {', '.join(sorted(extra))}")
        return MethodTable(**merged)

    def __contains__(self, method: object) -> bool:
        return method in self._lookup

    def __iter__(self) -> Iterator[str]:
        return iter(self._lookup)

    def __len__(self) -> int:
        return len(self._lookup)


DEFAULT_METHODS = MethodTable(
    pool=["poolStats", "credits", "blocks/history", "networkStats", "servers/history"],
    miner=[
        "miner/:miner/blocks",
        "miner/:miner/history",
        "miner/:miner/payouts",
        "miner/:miner/rounds",
        "miner/:miner/settings",
        "miner/:miner/currentStats",
    ],
    worker=[
        "miner/:miner/workers",
        "miner/:miner/worker/:worker/history",
        "miner/:miner/worker/:worker/currentStats",
        "miner/:miner/workers/monitor",
    ],
)


def _path_segment(value: Any) -> str:
    return quote(str(value), safe="")


def _coerce_params(method: str, category: MethodCategory, params: Params) -> Dict[str, Any]:
    if params is None:
        return {}
    if isinstance(params, str):
        # A bare string is the miner address, as in `client.call("miner/:miner/history", addr)`.
        if category in (MethodCategory.MINER, MethodCategory.WORKER):
            return {"miner": params}
        raise EncodingError(f"{method} expects a mapping of parameters, got a string")
    if not isinstance(params, Mapping):
        raise EncodingError(
            f"{method} expects a mapping of parameters, got {type(params).__name__}"
        )
    for key in params:
        check_key(key)
    return dict(params)


def build_route(
    method: str,
    category: MethodCategory,
    params: Params,
    config: ClientConfig,
) -> Route:
    """
    Build the request path for ``method``.

    Identifiers substituted into ``:miner`` / ``:worker`` are removed from the
    returned params. The miner defaults to the configured wallet; a ``:worker``
    placeholder without a ``worker`` parameter raises
    :class:`MissingParameterError`.
    """
    remaining = _coerce_params(method, category, params)

    if category is MethodCategory.PUBLIC:
        path = f"/{config.version}/public/{method}"
    elif category in (MethodCategory.MINER, MethodCategory.WORKER):
        path = "/" + method
        miner = remaining.pop("miner", None)
        if MINER_PLACEHOLDER in path:
            if miner is None or miner == "":
                miner = config.wallet
            path = path.replace(MINER_PLACEHOLDER, _path_segment(miner))
        if category is MethodCategory.WORKER and WORKER_PLACEHOLDER in path:
            worker = remaining.pop("worker", None)
            if worker is None or worker == "":
                raise MissingParameterError(method, "worker")
            path = path.replace(WORKER_PLACEHOLDER, _path_segment(worker))
    else:
        path = "/" + method

    return Route(method=method, category=category, path=path, params=remaining)
