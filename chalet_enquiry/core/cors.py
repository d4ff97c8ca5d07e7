from chalet_enquiry.core.config import Settings


#Origin is echoed for the canonical site and its subdomains only
def allowed_origin(origin: str | None, settings: Settings) -> str:
    origin = origin or ""
    if origin == settings.ALLOWED_ORIGIN:
        return origin
    if origin.endswith("." + settings.ALLOWED_ORIGIN_DOMAIN):
        return origin
    return settings.ALLOWED_ORIGIN


#Headers attached to every response, including preflight and errors
def cors_headers(origin: str | None, settings: Settings) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": allowed_origin(origin, settings),
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type",
    }
