from slowapi import Limiter
from slowapi.util import get_remote_address

# per client address; limits are declared on the routes
limiter = Limiter(key_func=get_remote_address)

# answered on OPTIONS by the endpoints the verification app calls directly
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
