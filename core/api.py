"""
Pomocné funkce pro JSON API.

``api_view`` je jediné místo, kde se z chyb API stávají odpovědi: potomci
``ApiError`` se vrátí se svým statusem, ``Http404`` z ``get_object_or_404``
se změní na JSON 404 a cokoli jiného se zaloguje i s tracebackem a skryje za
obecnou chybu 500.
"""
import json
import logging
from functools import wraps

from django.http import Http404, JsonResponse
from django.utils.html import escape

from .exceptions import ApiError, BadRequest, MethodNotAllowed, NotFound, TooManyRequests, Unauthorized

logger = logging.getLogger(__name__)


def api_view(methods):
    """
    Dekorátor pro funkční API view.

    Args:
        methods: HTTP metody, které view přijímá; ostatní dostanou 405.
    """
    allowed = [m.upper() for m in methods]

    def decorator(view):
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            if request.method not in allowed:
                response = error_response(MethodNotAllowed())
                response["Allow"] = ", ".join(allowed)
                return response
            try:
                return view(request, *args, **kwargs)
            except ApiError as exc:
                return error_response(exc)
            except Http404:
                return error_response(NotFound())
            except Exception:
                logger.exception("Unhandled error in API view %s", view.__name__)
                return error_response(ApiError())
        return wrapper
    return decorator


def error_response(exc: ApiError) -> JsonResponse:
    response = JsonResponse(exc.payload(), status=exc.status)
    if isinstance(exc, TooManyRequests) and exc.retry_after is not None:
        response["Retry-After"] = str(exc.retry_after)
    return response


def parse_json(request) -> dict:
    """Dekóduje tělo jako JSON objekt, jinak vyhodí ``BadRequest``."""
    try:
        data = json.loads(request.body or b"{}")
    except (ValueError, UnicodeDecodeError):
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return data


def require_user(request):
    """Vrátí přihlášeného uživatele, jinak vyhodí ``Unauthorized``."""
    if not request.user.is_authenticated:
        raise Unauthorized()
    return request.user


def int_param(request, name, default, minimum=1, maximum=None):
    """
    Načte kladný celočíselný parametr z query stringu.

    Chybějící nebo prázdná hodnota znamená ``default``; cokoli, co není
    celé číslo v rozsahu, je ``BadRequest``.
    """
    raw = request.GET.get(name)
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except ValueError:
        raise BadRequest(f"'{name}' must be an integer")
    if value < minimum:
        raise BadRequest(f"'{name}' must be at least {minimum}")
    if maximum is not None:
        value = min(value, maximum)
    return value


def paginate(queryset, page, limit):
    """Vybere stránku z ``queryset`` a vrátí ``(items, total, total_pages)``."""
    total = queryset.count()
    offset = (page - 1) * limit
    items = list(queryset[offset:offset + limit])
    total_pages = (total + limit - 1) // limit
    return items, total, total_pages


def sanitize_input(value: str) -> str:
    """Escapuje HTML v textu od uživatele před uložením a ořízne mezery."""
    return escape(value).strip()


def isoformat(value):
    return value.isoformat() if value else None


def id_param(request, name, required=True):
    """Načte číselné id z query stringu; ``None``, pokud je nepovinné a chybí."""
    raw = request.GET.get(name, "").strip()
    if not raw:
        if required:
            raise BadRequest(f"{name} is required")
        return None
    if not (raw.isascii() and raw.isdigit()):
        raise BadRequest(f"'{name}' must be a numeric id")
    return int(raw)
