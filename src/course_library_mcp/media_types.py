"""Content negotiation through vendor media types.

Clients pick an author representation with the Accept value:

    application/json                                   friendly, no links
    application/vnd.marvin.author.friendly+json        friendly, no links
    application/vnd.marvin.hateoas+json                friendly, with links
    application/vnd.marvin.author.friendly.hateoas+json
    application/vnd.marvin.author.full+json            full, no links
    application/vnd.marvin.author.full.hateoas+json    full, with links

and the creation payload with the Content-Type value. The vendor tree
(``vnd.marvin``) comes from configuration.
"""

import logging
from dataclasses import dataclass, field

from .config import get_config
from .models.author import AuthorForCreationDto, AuthorForCreationWithDateOfDeathDto

logger = logging.getLogger(__name__)

HATEOAS_SUFFIX = ".hateoas"


class MediaTypeError(Exception):
    """Base for content negotiation failures."""


class NotAcceptableError(MediaTypeError):
    """None of the accepted media types can be produced."""

    def __init__(self, accept: str) -> None:
        self.accept = accept
        super().__init__(f"Not acceptable: {accept!r}")


class UnsupportedMediaTypeError(MediaTypeError):
    """The request body's media type cannot be consumed."""

    def __init__(self, content_type: str) -> None:
        self.content_type = content_type
        super().__init__(f"Unsupported media type: {content_type!r}")


@dataclass(frozen=True)
class MediaType:
    """A parsed ``type/subtype[+suffix]; params`` value."""

    type: str
    subtype: str
    suffix: str | None = None
    parameters: dict[str, str] = field(default_factory=dict, compare=False)

    @property
    def essence(self) -> str:
        suffix = f"+{self.suffix}" if self.suffix else ""
        return f"{self.type}/{self.subtype}{suffix}"

    @property
    def quality(self) -> float:
        try:
            return float(self.parameters.get("q", "1"))
        except ValueError:
            return 0.0


def parse_media_type(value: str) -> MediaType:
    """
    Parse one media type, lower-casing type, subtype and parameter names.

    Raises:
        ValueError: If the value is not ``type/subtype``
    """
    essence, *raw_params = value.split(";")
    essence = essence.strip().lower()
    type_, sep, subtype = essence.partition("/")
    if not sep or not type_ or not subtype or "/" in subtype:
        raise ValueError(f"Invalid media type: {value!r}")

    suffix = None
    if "+" in subtype:
        subtype, suffix = subtype.rsplit("+", 1)

    parameters = {}
    for raw_param in raw_params:
        name, _, param_value = raw_param.partition("=")
        if name.strip():
            parameters[name.strip().lower()] = param_value.strip().strip('"')

    return MediaType(type_, subtype, suffix, parameters)


def parse_accept(accept: str | None) -> list[MediaType]:
    """Parse an Accept value into media types, highest quality first."""
    if accept is None or not accept.strip():
        return [MediaType("*", "*")]
    media_types = [parse_media_type(part) for part in accept.split(",") if part.strip()]
    # sorted() is stable, so equal qualities keep the client's order
    return sorted(media_types, key=lambda m: m.quality, reverse=True)


@dataclass(frozen=True)
class AuthorRepresentation:
    """Which author DTO to return and whether to attach links."""

    full: bool = False
    include_links: bool = False


def _vendor() -> str:
    return get_config().vendor_media_type


def _author_representation(media_type: MediaType) -> AuthorRepresentation | None:
    if media_type.type == "*" or (media_type.type == "application" and media_type.subtype == "*"):
        return AuthorRepresentation()
    if media_type.type != "application" or media_type.suffix not in (None, "json"):
        return None
    if media_type.subtype == "json" and media_type.suffix is None:
        return AuthorRepresentation()
    if media_type.suffix != "json":
        return None

    vendor = _vendor()
    subtype = media_type.subtype
    include_links = subtype.endswith(HATEOAS_SUFFIX)
    primary = subtype.removesuffix(HATEOAS_SUFFIX) if include_links else subtype

    if primary == vendor and include_links:
        return AuthorRepresentation(include_links=True)
    if primary == f"{vendor}.author.friendly":
        return AuthorRepresentation(include_links=include_links)
    if primary == f"{vendor}.author.full":
        return AuthorRepresentation(full=True, include_links=include_links)
    return None


def negotiate_author_representation(accept: str | None) -> AuthorRepresentation:
    """
    Choose the author representation for an Accept value.

    Raises:
        NotAcceptableError: If no listed media type is supported
        ValueError: If the Accept value is malformed
    """
    for media_type in parse_accept(accept):
        if media_type.quality <= 0:
            continue
        representation = _author_representation(media_type)
        if representation is not None:
            logger.debug("Negotiated %s for Accept %r", representation, accept)
            return representation
    raise NotAcceptableError(accept or "")


def select_author_creation_model(
    content_type: str | None,
) -> type[AuthorForCreationDto]:
    """
    Choose the creation payload model for a Content-Type value.

    A missing Content-Type is treated as ``application/json``.

    Raises:
        UnsupportedMediaTypeError: If the media type cannot be consumed
        ValueError: If the Content-Type value is malformed
    """
    media_type = parse_media_type(content_type or "application/json")
    vendor = _vendor()

    if media_type.type == "application":
        if media_type.subtype == "json" and media_type.suffix is None:
            return AuthorForCreationDto
        if media_type.suffix == "json":
            if media_type.subtype == f"{vendor}.authorforcreation":
                return AuthorForCreationDto
            if media_type.subtype == f"{vendor}.authorforcreationwithdateofdeath":
                return AuthorForCreationWithDateOfDeathDto

    raise UnsupportedMediaTypeError(content_type or "")
