"""Typed records for Big Cartel resources and their JSON:API decoders.

Each decoder takes a parsed JSON:API document (or a single resource object
from one), checks that the identifying fields are present, and maps the
attributes onto a frozen dataclass. A record is either fully decoded or the
decoder raises; callers never see a half-filled value.

Related objects (currency, country, plan, image) live in the document's
``included`` array. They are indexed by ``(type, id)`` and resolved through
the resource's ``relationships`` references.
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from .errors import BigCartelDecodeError, BigCartelNotFoundError

IncludedIndex = Dict[Tuple[str, str], Dict[str, Any]]

CURRENCY_TYPE = "currencies"
COUNTRY_TYPE = "countries"
PLAN_TYPE = "plans"
ACCOUNT_IMAGE_TYPE = "account_images"
CATEGORY_TYPE = "categories"


# ----------------------------- coercion -----------------------------


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _as_int(value: Any, path: str) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, (bool, int)):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise BigCartelDecodeError(f"{path} is not an integer: {value!r}") from e
    # inf and nan are not integral either
    if not number.is_integer():
        raise BigCartelDecodeError(f"{path} is not an integer: {value!r}")
    return int(number)


def _as_float(value: Any, path: str) -> float:
    if value is None or value == "":
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise BigCartelDecodeError(f"{path} is not a number: {value!r}") from e
    if not math.isfinite(number):
        raise BigCartelDecodeError(f"{path} is not a finite number: {value!r}")
    return number


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


def _attributes(resource: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not isinstance(resource, dict):
        return {}
    attrs = resource.get("attributes")
    return attrs if isinstance(attrs, dict) else {}


# ----------------------------- documents -----------------------------


def parse_document(body: Union[bytes, str]) -> Dict[str, Any]:
    """Parse a response body into a JSON:API top-level document."""
    try:
        document = json.loads(body)
    except (TypeError, ValueError) as e:
        raise BigCartelDecodeError(f"response body is not valid JSON: {e}") from e
    if not isinstance(document, dict):
        raise BigCartelDecodeError(
            f"expected a JSON object at the top level, got {type(document).__name__}"
        )
    return document


def index_included(document: Dict[str, Any]) -> IncludedIndex:
    """Map every ``included`` resource object by its ``(type, id)`` key.

    The first occurrence of a key wins; JSON:API forbids duplicates anyway.
    """
    index: IncludedIndex = {}
    included = document.get("included")
    if not isinstance(included, list):
        return index
    for item in included:
        if not isinstance(item, dict):
            continue
        key = (_as_str(item.get("type")), _as_str(item.get("id")))
        index.setdefault(key, item)
    return index


def resolve_related(
    resource: Dict[str, Any],
    included: IncludedIndex,
    relationship: str,
    resource_type: str,
) -> Optional[Dict[str, Any]]:
    """Find the included object a relationship points to.

    When the resource carries no linkage for ``relationship``, fall back to
    the first included object of ``resource_type``. A linkage whose key is
    not in ``included`` resolves to None.
    """
    relationships = resource.get("relationships")
    rel = relationships.get(relationship) if isinstance(relationships, dict) else None
    linkage = rel.get("data") if isinstance(rel, dict) else None
    if isinstance(linkage, dict):
        key = (_as_str(linkage.get("type")), _as_str(linkage.get("id")))
        return included.get(key)

    for (kind, _), item in included.items():
        if kind == resource_type:
            return item
    return None


def _related_link(resource: Dict[str, Any], relationship: str) -> str:
    relationships = resource.get("relationships")
    if not isinstance(relationships, dict):
        return ""
    rel = relationships.get(relationship)
    if not isinstance(rel, dict):
        return ""
    links = rel.get("links")
    if not isinstance(links, dict):
        return ""
    return _as_str(links.get("related"))


# ----------------------------- account -----------------------------


@dataclass(frozen=True)
class AccountCurrency:
    id: str = ""
    name: str = ""
    sign: str = ""
    locale: str = ""

    @classmethod
    def from_resource(cls, resource: Optional[Dict[str, Any]]) -> "AccountCurrency":
        if not resource:
            return cls()
        attrs = _attributes(resource)
        return cls(
            id=_as_str(resource.get("id")),
            name=_as_str(attrs.get("name")),
            sign=_as_str(attrs.get("sign")),
            locale=_as_str(attrs.get("locale")),
        )


@dataclass(frozen=True)
class AccountCountry:
    id: str = ""
    name: str = ""

    @classmethod
    def from_resource(cls, resource: Optional[Dict[str, Any]]) -> "AccountCountry":
        if not resource:
            return cls()
        return cls(
            id=_as_str(resource.get("id")),
            name=_as_str(_attributes(resource).get("name")),
        )


@dataclass(frozen=True)
class AccountPlan:
    """Billing plan. ``id`` is one of gold, platinum, diamond or titanium."""

    id: str = ""
    name: str = ""
    max_products: int = 0
    max_images_per_product: int = 0
    monthly_rate: float = 0.0

    @classmethod
    def from_resource(cls, resource: Optional[Dict[str, Any]]) -> "AccountPlan":
        if not resource:
            return cls()
        attrs = _attributes(resource)
        return cls(
            id=_as_str(resource.get("id")),
            name=_as_str(attrs.get("name")),
            max_products=_as_int(attrs.get("max_products"), "plans.max_products"),
            max_images_per_product=_as_int(
                attrs.get("max_images_per_product"), "plans.max_images_per_product"
            ),
            monthly_rate=_as_float(attrs.get("monthly_rate"), "plans.monthly_rate"),
        )


@dataclass(frozen=True)
class AccountImage:
    id: str = ""
    url: str = ""

    @classmethod
    def from_resource(cls, resource: Optional[Dict[str, Any]]) -> "AccountImage":
        if not resource:
            return cls()
        return cls(
            id=_as_str(resource.get("id")),
            url=_as_str(_attributes(resource).get("url")),
        )


@dataclass(frozen=True)
class AccountLinks:
    self_link: str = ""
    orders: str = ""
    categories: str = ""
    products: str = ""


@dataclass(frozen=True)
class Account:
    """A Big Cartel store account."""

    id: str
    subdomain: str
    store_name: str
    description: str
    contact_email: str
    first_name: str
    last_name: str
    url: str
    website: str
    created_at: str
    updated_at: str
    under_maintenance: bool
    inventory_enabled: bool
    artists_enabled: bool
    time_zone: str
    currency: AccountCurrency = field(default_factory=AccountCurrency)
    country: AccountCountry = field(default_factory=AccountCountry)
    plan: AccountPlan = field(default_factory=AccountPlan)
    image: AccountImage = field(default_factory=AccountImage)
    links: AccountLinks = field(default_factory=AccountLinks)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _primary_resource(document: Dict[str, Any], collection: bool) -> Optional[Dict[str, Any]]:
    data = document.get("data")
    if collection:
        if isinstance(data, list) and data and isinstance(data[0], dict):
            return data[0]
        return None
    return data if isinstance(data, dict) else None


def decode_account(document: Dict[str, Any], *, collection: bool = False) -> Account:
    """Decode an account from a JSON:API document.

    ``collection=True`` takes the first element of ``data`` (``GET /accounts``);
    otherwise ``data`` is the account itself (``GET /accounts/{id}``).
    """
    resource = _primary_resource(document, collection)
    attrs = _attributes(resource)
    if resource is None or not _as_str(resource.get("id")) or not _as_str(attrs.get("url")):
        raise BigCartelNotFoundError("no account data found")

    included = index_included(document)
    links = resource.get("links") if isinstance(resource.get("links"), dict) else {}

    return Account(
        id=_as_str(resource.get("id")),
        subdomain=_as_str(attrs.get("subdomain")),
        store_name=_as_str(attrs.get("store_name")),
        description=_as_str(attrs.get("description")),
        contact_email=_as_str(attrs.get("contact_email")),
        first_name=_as_str(attrs.get("first_name")),
        last_name=_as_str(attrs.get("last_name")),
        url=_as_str(attrs.get("url")),
        website=_as_str(attrs.get("website")),
        created_at=_as_str(attrs.get("created_at")),
        updated_at=_as_str(attrs.get("updated_at")),
        under_maintenance=_as_bool(attrs.get("under_maintenance")),
        inventory_enabled=_as_bool(attrs.get("inventory_enabled")),
        artists_enabled=_as_bool(attrs.get("artists_enabled")),
        time_zone=_as_str(attrs.get("time_zone")),
        currency=AccountCurrency.from_resource(
            resolve_related(resource, included, "currency", CURRENCY_TYPE)
        ),
        country=AccountCountry.from_resource(
            resolve_related(resource, included, "country", COUNTRY_TYPE)
        ),
        plan=AccountPlan.from_resource(
            resolve_related(resource, included, "plan", PLAN_TYPE)
        ),
        image=AccountImage.from_resource(
            resolve_related(resource, included, "image", ACCOUNT_IMAGE_TYPE)
        ),
        links=AccountLinks(
            self_link=_as_str(links.get("self")),
            orders=_related_link(resource, "orders"),
            categories=_related_link(resource, "categories"),
            products=_related_link(resource, "products"),
        ),
    )


# ----------------------------- category -----------------------------


@dataclass(frozen=True)
class Category:
    """A product category belonging to one account."""

    id: str
    name: str
    permalink: str
    position: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def decode_category_resource(resource: Any) -> Category:
    """Decode one category resource object."""
    if (
        not isinstance(resource, dict)
        or not _as_str(resource.get("id"))
        or not _as_str(resource.get("type"))
    ):
        raise BigCartelNotFoundError("no category data found")
    attrs = _attributes(resource)
    return Category(
        id=_as_str(resource.get("id")),
        name=_as_str(attrs.get("name")),
        permalink=_as_str(attrs.get("permalink")),
        position=_as_int(attrs.get("position"), "categories.position"),
    )


def decode_category(document: Dict[str, Any]) -> Category:
    """Decode a single-category document (``data`` is one resource object)."""
    return decode_category_resource(document.get("data"))


def decode_categories(document: Dict[str, Any]) -> List[Category]:
    """Decode a category collection. An empty ``data`` array yields ``[]``."""
    data = document.get("data")
    if data is None:
        raise BigCartelNotFoundError("no category data found")
    if not isinstance(data, list):
        raise BigCartelDecodeError(
            f"expected a list of categories, got {type(data).__name__}"
        )
    return [decode_category_resource(item) for item in data]
