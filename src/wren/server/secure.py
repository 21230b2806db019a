"""Secure response headers and HTTPS redirection.

Applied to every response before routing. Plain-HTTP requests are
redirected to their ``https://`` URL when ``AppConfig.https_redirect``
is on; HTTPS responses carry ``Strict-Transport-Security``.
"""

import ipaddress

from wren.config import AppConfig
from wren.http.request import Request
from wren.http.writer import ResponseWriter


def is_https(request: Request, config: AppConfig) -> bool:
    """True if the request reached us (or the proxy in front) over TLS."""
    if request.scheme == "https":
        return True
    if config.https_use_forwarded_proto:
        return request.headers.get("x-forwarded-proto", "").lower() == "https"
    return False


def _is_loopback(request: Request) -> bool:
    if request.client is None:
        return False
    try:
        return ipaddress.ip_address(request.client[0]).is_loopback
    except ValueError:
        return request.client[0] == "localhost"


def https_url(request: Request) -> str:
    """The ``https://`` URL for *request*."""
    return f"https://{request.host}{request.url}"


def needs_redirect(request: Request, config: AppConfig) -> bool:
    """Whether *request* must be redirected to HTTPS."""
    if not config.https_redirect or is_https(request, config):
        return False
    return not (config.permit_clear_loopback and _is_loopback(request))


def apply_secure_headers(writer: ResponseWriter, request: Request, config: AppConfig) -> None:
    """Set the configured security headers on *writer*."""
    if config.hsts_max_age > 0 and is_https(request, config):
        value = f"max-age={config.hsts_max_age}"
        if config.hsts_include_subdomains:
            value += "; includeSubDomains"
        writer.headers["Strict-Transport-Security"] = value
    if config.frame_options:
        writer.headers["X-Frame-Options"] = config.frame_options
    if config.content_type_options:
        writer.headers["X-Content-Type-Options"] = config.content_type_options
    if config.xss_protection:
        writer.headers["X-XSS-Protection"] = config.xss_protection
