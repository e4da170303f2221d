"""
Configuration constants and enums for the routing relay.
Defines supported actions, upstream endpoint paths, CORS headers and client-facing messages.
"""

from enum import Enum


class Action(str, Enum):
    GEOCODE = "geocode"
    ROUTE = "route"
    DIRECT_DISTANCE = "direct_distance"
    OPTIMIZATION = "optimization"


class Http_Method(str, Enum):
    GET = "GET"
    POST = "POST"


class Ors_Endpoints:
    GEOCODE_AUTOCOMPLETE = "/geocode/autocomplete"
    DIRECTIONS = "/v2/directions/{profile}/geojson"
    OPTIMIZATION = "/optimization"


class Upstream_Call_Config:
    ERROR_MESSAGE_KEYS = ("error", "message", "error_message")
    RAW_BODY_ERROR_LIMIT = 500
    RAW_BODY_LOG_LIMIT = 1000


class Cors_Headers:
    HEADERS = {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Authorization",
        "Content-Type": "application/json",
    }


class Relay_Messages:
    INVALID_REQUEST = "Acción no especificada o datos inválidos."
    UNKNOWN_ACTION = "Acción no reconocida."
    MISSING_QUERY = 'Falta el parámetro "query" para la geocodificación.'
    INVALID_QUERY = 'El parámetro "query" debe ser texto o un número.'
    MISSING_COORDINATES = 'Faltan las coordenadas ("coordinates") para el enrutamiento.'
    MISSING_OPTIMIZATION_FIELDS = "Faltan los parámetros {fields} para la optimización."
    NO_KEYS_CONFIGURED = "No API keys configured or all failed without a specific error."
    KEY_ATTEMPT_SUFFIX = "(failed with key {index}/{total})"
    TRANSPORT_ERROR = "Transport error: {error}"
    UNEXPECTED_RESPONSE = "Unexpected response from the API."
    INTERNAL_ERROR = "Internal Server Error. Please check server logs for more details."
