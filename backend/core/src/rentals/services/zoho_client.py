"""Zoho CRM client for properties, rooms and reservations.

Fetches the inputs of an availability search:

- candidate properties from the properties module
- reservations overlapping a window, paged through COQL
- the room to property lookup, resolved through COQL in concurrent batches

It also lists the rooms module for room detail pages.

Records are mapped onto the rentals models using one canonical CRM field
name per value. The client does not refresh OAuth tokens; it asks a token
provider for the current token on every request.
"""

import math
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import httpx

from rentals.config import ZohoSettings
from rentals.models import (
    DEFAULT_PROPERTY_TYPE,
    DEFAULT_ROOM_NAME,
    ErrorCode,
    PropertyAvailability,
    PropertyCandidate,
    RentalsError,
    RequestedWindow,
    ReservationRecord,
    ReservationStatus,
    RoomListing,
)
from rentals.services.ssm_service import SSMService, get_ssm_service
from rentals.utils.dates import parse_strict_date
from rentals.utils.logging import get_logger

logger = get_logger(__name__)

PROPERTY_FIELDS = (
    "Name,number_of_rooms,property_type,location,price_night,slugwordpress,"
    "Start_of_Availability,End_of_Availability"
)
RESERVATION_FIELDS = "Check_in, Check_out, room_reserved, status"

# Boolean amenity fields of the rooms module and their display labels
ROOM_AMENITY_FIELDS = {
    "A_C_Aire_Acondicionado": "Aire acondicionado",
    "rea_descanso": "Área descanso",
    "Armario": "Armario",
    "Armario_Empotrado": "Armario Empotrado",
    "Balc_n": "Balcón",
    "Ba_o_Privado": "Baño Privado",
    "Buena_ventilaci_n_natural": "Buena ventilación natural",
    "Calefacci_n": "Calefacción",
    "Cama_doble": "Cama doble",
    "Canap_con_almacenamiento": "Canapé con almacenamiento",
    "Cerradura_digital_Akiles": "Cerradura digital Akiles",
    "Cocina_privada": "Cocina privada",
    "Comedor": "Comedor",
    "Cortinas_opacas": "Cortinas opacas",
    "Enchufes_m_ltiples_USB": "Enchufes múltiples / USB",
    "Escritorio": "Escritorio",
    "Espejo_de_cuerpo_entero": "Espejo de cuerpo entero",
    "Extractor": "Extractor",
    "Extractor_de_humo": "Extractor de humo",
    "Habitaci_n_Amueblada": "Habitación Amueblada",
    "L_mpara_de_escritorio": "Lámpara de escritorio",
    "L_mpara_interior": "Lámpara interior",
    "Lavadora": "Lavadora",
    "Maleteros": "Maleteros",
}
ROOM_FIELDS = ",".join(
    [
        "Name",
        "url_featured_image",
        "Inmueble_Principal",
        "slugwordpress",
        "price_night",
        "bathroom_quantity",
        "square_meters",
        "features",
        "description",
        "Has_Terrace",
        "Has_Washer",
        *ROOM_AMENITY_FIELDS,
    ]
)

TokenProvider = Callable[[], str]


class ZohoClientError(Exception):
    """Raised when a CRM request fails or returns an unusable body."""


class ZohoAuthError(ZohoClientError):
    """Raised when the CRM rejects the access token."""


def build_token_provider(
    settings: ZohoSettings,
    ssm: SSMService | None = None,
) -> TokenProvider:
    """Create the access token provider for the configured source.

    Args:
        settings: Zoho settings
        ssm: Optional SSM service (defaults to the shared instance)

    Returns:
        Callable returning the current access token. It raises RentalsError
        with CONFIGURATION_ERROR when no token source is configured.
    """
    if settings.access_token:
        token = settings.access_token
        return lambda: token

    if settings.access_token_parameter:
        parameter = settings.access_token_parameter

        def from_ssm() -> str:
            return (ssm or get_ssm_service()).get_parameter(parameter)

        return from_ssm

    def missing() -> str:
        raise RentalsError(ErrorCode.CONFIGURATION_ERROR)

    return missing


def build_token_invalidator(
    settings: ZohoSettings,
    ssm: SSMService | None = None,
) -> Callable[[], None] | None:
    """Create the hook that forgets a rejected token, if the source caches one."""
    if settings.access_token or not settings.access_token_parameter:
        return None
    parameter = settings.access_token_parameter
    return lambda: (ssm or get_ssm_service()).invalidate(parameter)


# === Record mapping ===


def extract_lookup(value: Any) -> tuple[str | None, str | None]:
    """Read ``(id, name)`` of a CRM lookup, given as an object or a one-element list."""
    if isinstance(value, list):
        return extract_lookup(value[0]) if value else (None, None)
    if not isinstance(value, dict):
        return None, None

    lookup_id = None
    raw = value.get("id")
    if isinstance(raw, (str, int)) and not isinstance(raw, bool):
        lookup_id = str(raw).strip() or None

    lookup_name = None
    name = value.get("name", value.get("Name"))
    if isinstance(name, str):
        lookup_name = name.strip() or None
    return lookup_id, lookup_name


def extract_lookup_id(value: Any) -> str | None:
    return extract_lookup(value)[0]


def safe_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def safe_int(value: Any) -> int | None:
    number = safe_number(value)
    if number is None or not math.isfinite(number) or number < 0:
        return None
    return int(number)


def _clean_str(value: Any) -> str | None:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def map_property_record(record: dict[str, Any]) -> PropertyCandidate:
    """Map a properties module record onto a PropertyCandidate.

    Malformed availability bounds are treated as absent.
    """
    return PropertyCandidate(
        id=str(record["id"]),
        total_rooms=safe_int(record.get("number_of_rooms")),
        availability=PropertyAvailability(
            start_of_availability=parse_strict_date(record.get("Start_of_Availability")),
            end_of_availability=parse_strict_date(record.get("End_of_Availability")),
        ),
        title=_clean_str(record.get("Name")) or "Inmueble sin título",
        property_type=_clean_str(record.get("property_type")) or DEFAULT_PROPERTY_TYPE,
        location=_clean_str(record.get("location")),
        price_per_night=safe_number(record.get("price_night")),
        slug=_clean_str(record.get("slugwordpress")),
    )


def map_reservation_record(record: dict[str, Any]) -> ReservationRecord:
    """Map a reservations module record onto a ReservationRecord."""
    return ReservationRecord(
        id=_clean_str(record.get("id")),
        unit_id=extract_lookup_id(record.get("room_reserved")),
        check_in=parse_strict_date(record.get("Check_in")),
        check_out=parse_strict_date(record.get("Check_out")),
        status=_clean_str(record.get("status")) or ReservationStatus.PENDING.value,
    )


def map_room_record(record: dict[str, Any]) -> RoomListing:
    """Map a rooms module record onto a RoomListing.

    Amenity flags that are not booleans on the record are left out of
    ``amenities``; flags set to True are also appended to ``features``.
    """
    property_id, property_name = extract_lookup(record.get("Inmueble_Principal"))

    raw_features = record.get("features")
    if not isinstance(raw_features, list):
        raw_features = []
    features = [f.strip() for f in raw_features if isinstance(f, str) and f.strip()]

    amenities: dict[str, bool] = {}
    for field, label in ROOM_AMENITY_FIELDS.items():
        flag = record.get(field)
        if isinstance(flag, bool):
            amenities[label] = flag
            if flag:
                features.append(label)

    description = record.get("description")
    has_terrace = record.get("Has_Terrace")
    has_washer = record.get("Has_Washer")

    return RoomListing(
        id=str(record["id"]),
        name=_clean_str(record.get("Name")) or DEFAULT_ROOM_NAME,
        property_id=property_id,
        property_name=property_name,
        property_slug=_clean_str(record.get("slugwordpress")),
        image_url=_clean_str(record.get("url_featured_image")),
        price_per_night=safe_number(record.get("price_night")),
        bathrooms=safe_number(record.get("bathroom_quantity")),
        square_meters=safe_number(record.get("square_meters")),
        description=description if isinstance(description, str) else "",
        features=list(dict.fromkeys(features)),
        amenities=amenities,
        has_terrace=has_terrace if isinstance(has_terrace, bool) else None,
        has_washer=has_washer if isinstance(has_washer, bool) else None,
    )


# === Query builders ===


def build_property_criteria(
    property_type: str | None = None,
    location: str | None = None,
) -> str:
    """Build the Zoho search criteria for the property listing."""
    parts: list[str] = []
    if property_type:
        parts.append(f"(property_type:equals:{property_type})")
    if location:
        parts.append(f"(location:equals:{location})")
    return " and ".join(parts)


def build_room_criteria(
    property_id: str | None = None,
    property_slug: str | None = None,
) -> str:
    """Build the Zoho search criteria for the room listing."""
    parts: list[str] = []
    if property_id:
        parts.append(f"(Inmueble_Principal.id:equals:{property_id})")
    if property_slug:
        parts.append(f"(Inmueble_Principal.slugwordpress:equals:{property_slug})")
    return " and ".join(parts)


def build_overlap_where_clause(window: RequestedWindow) -> str:
    """COQL condition for non-cancelled reservations touching the window.

    The bounds are inclusive so the CRM returns a superset; exact half-open
    overlap is decided by the availability checks.
    """
    start = window.start.isoformat()
    end = window.end.isoformat()
    return (
        f"((Check_in <= '{end}') and (Check_out >= '{start}')) "
        f"and (status != '{ReservationStatus.CANCELLED.value}')"
    )


def _chunks(items: list[str], size: int) -> list[list[str]]:
    return [items[i : i + size] for i in range(0, len(items), size)]


class ZohoClient:
    """Synchronous HTTP client for the Zoho CRM v8 API."""

    def __init__(
        self,
        settings: ZohoSettings,
        token_provider: TokenProvider,
        http: httpx.Client | None = None,
        on_auth_failure: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Zoho settings
            token_provider: Callable returning the current access token
            http: Optional preconfigured httpx client (used by tests)
            on_auth_failure: Called when the CRM rejects the token
        """
        self.settings = settings
        self._token_provider = token_provider
        self._on_auth_failure = on_auth_failure
        self.http = http or httpx.Client(timeout=settings.timeout_seconds)

    def close(self) -> None:
        self.http.close()

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Zoho-oauthtoken {self._token_provider()}"}

    def _request(
        self,
        method: str,
        url: str,
        *,
        not_found_ok: bool = False,
        **kwargs: Any,
    ) -> dict[str, Any] | None:
        """Send a request and decode its JSON body.

        Args:
            method: HTTP method
            url: Absolute endpoint URL
            not_found_ok: Treat 404 as an empty response
            **kwargs: Passed through to httpx

        Returns:
            Decoded body, or None for empty responses (Zoho answers 204 when
            nothing matches)

        Raises:
            ZohoAuthError: On 401/403
            ZohoClientError: On transport errors, other error statuses or
                unparseable bodies
        """
        try:
            response = self.http.request(method, url, headers=self._headers(), **kwargs)
        except httpx.TimeoutException as exc:
            raise ZohoClientError(f"zoho_timeout: {method} {url}") from exc
        except httpx.HTTPError as exc:
            raise ZohoClientError(f"zoho_connection_failed: {exc}") from exc

        if response.status_code in {401, 403}:
            if self._on_auth_failure is not None:
                self._on_auth_failure()
            raise ZohoAuthError(f"zoho_auth_failed: {response.status_code}")
        if response.status_code == 404 and not_found_ok:
            return None
        if response.status_code >= 400:
            raise ZohoClientError(
                f"zoho_error_{response.status_code}: {response.text[:500]}"
            )
        if response.status_code == 204 or not response.content.strip():
            return None

        try:
            payload = response.json()
        except ValueError as exc:
            raise ZohoClientError(f"zoho_invalid_json: {exc}") from exc
        if not isinstance(payload, dict):
            raise ZohoClientError("zoho_invalid_json: expected an object")
        return payload

    @staticmethod
    def _records(payload: dict[str, Any] | None) -> list[dict[str, Any]]:
        if not payload:
            return []
        data = payload.get("data") or []
        return [r for r in data if isinstance(r, dict)]

    # === Properties ===

    def list_properties(
        self,
        property_type: str | None = None,
        location: str | None = None,
    ) -> list[PropertyCandidate]:
        """List candidate properties, optionally filtered by type and location."""
        params = {"fields": PROPERTY_FIELDS}
        criteria = build_property_criteria(property_type, location)
        if criteria:
            params["criteria"] = criteria

        payload = self._request(
            "GET",
            self.settings.module_endpoint(self.settings.properties_module),
            params=params,
        )
        records = self._records(payload)
        return [map_property_record(r) for r in records if r.get("id")]

    # === Reservations ===

    def search_reservations(
        self,
        where_clause: str,
        limit: int = 50,
        offset: int = 0,
    ) -> list[ReservationRecord]:
        """Run one page of a COQL reservation query.

        Args:
            where_clause: COQL WHERE condition
            limit: Page size
            offset: Number of records to skip

        Returns:
            Reservation records of the page
        """
        select_query = (
            f"select {RESERVATION_FIELDS} from {self.settings.reservations_module} "
            f"where {where_clause} limit {offset}, {limit}"
        )
        logger.debug("COQL query: %s", select_query)
        payload = self._request(
            "POST",
            self.settings.coql_endpoint,
            json={"select_query": select_query},
        )
        return [map_reservation_record(r) for r in self._records(payload)]

    def fetch_overlapping_reservations(
        self,
        window: RequestedWindow,
    ) -> list[ReservationRecord]:
        """Fetch every non-cancelled reservation touching the window.

        Pages through the COQL results until a page comes back empty or
        shorter than the page size.
        """
        where_clause = build_overlap_where_clause(window)
        limit = self.settings.reservation_page_size
        offset = 0
        reservations: list[ReservationRecord] = []

        while True:
            page = self.search_reservations(where_clause, limit=limit, offset=offset)
            reservations.extend(page)
            if len(page) < limit:
                break
            offset += limit

        logger.info(
            "Fetched %d reservations overlapping %s..%s",
            len(reservations),
            window.start.isoformat(),
            window.end.isoformat(),
        )
        return reservations

    # === Rooms ===

    def list_rooms(
        self,
        property_id: str | None = None,
        property_slug: str | None = None,
        room_id: str | None = None,
    ) -> list[RoomListing]:
        """List rooms, optionally narrowed to one property or one room.

        A ``room_id`` is fetched directly and takes precedence over the
        property filters; an unknown room yields an empty list.
        """
        endpoint = self.settings.module_endpoint(self.settings.rooms_module)

        if room_id:
            payload = self._request("GET", f"{endpoint}/{room_id}", not_found_ok=True)
        else:
            params = {"fields": ROOM_FIELDS}
            criteria = build_room_criteria(property_id, property_slug)
            if criteria:
                params["criteria"] = criteria
            payload = self._request("GET", endpoint, params=params)

        records = self._records(payload)
        return [map_room_record(r) for r in records if r.get("id")]

    def _lookup_room_batch(self, room_ids: list[str]) -> dict[str, str]:
        ids = ",".join(f"'{room_id}'" for room_id in room_ids)
        select_query = (
            f"select Inmueble_Principal from {self.settings.rooms_module} "
            f"where id in ({ids})"
        )
        try:
            payload = self._request(
                "POST",
                self.settings.coql_endpoint,
                json={"select_query": select_query},
            )
        except ZohoAuthError:
            raise
        except ZohoClientError as exc:
            logger.error("Room batch lookup failed for %d rooms: %s", len(room_ids), exc)
            return {}

        mapping: dict[str, str] = {}
        for record in self._records(payload):
            room_id = _clean_str(record.get("id"))
            property_id = extract_lookup_id(record.get("Inmueble_Principal"))
            if room_id and property_id:
                mapping[room_id] = property_id
        return mapping

    def get_room_property_ids(self, room_ids: Iterable[str]) -> dict[str, str]:
        """Resolve rooms to their owning property.

        Lookups run concurrently in batches of ``room_batch_size``. A failed
        batch is logged and left out, so the mapping may be partial; rooms
        missing from it are not counted against any property.

        Args:
            room_ids: Room ids to resolve (duplicates are ignored)

        Returns:
            Mapping of room id to property id
        """
        unique_ids = list(dict.fromkeys(rid for rid in room_ids if rid))
        if not unique_ids:
            return {}

        batches = _chunks(unique_ids, self.settings.room_batch_size)
        mapping: dict[str, str] = {}
        with ThreadPoolExecutor(max_workers=self.settings.max_workers) as executor:
            for partial in executor.map(self._lookup_room_batch, batches):
                mapping.update(partial)
        return mapping
