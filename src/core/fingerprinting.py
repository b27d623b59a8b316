"""Client identification helpers.

Source IP and device fingerprint feed the brute-force guard (keyed by IP)
and refresh token records (bound to a device fingerprint).

Fingerprint Components:
- User-Agent header
- Client IP address (normalized)

Security:
- SHA256 hash (64 hex characters), not reversible
- Proxy headers (X-Forwarded-For, X-Real-IP) are only honoured when the
  deployment says a trusted proxy sets them; otherwise any client could
  pick its own "IP" and dodge the login lockout
"""

import hashlib

from fastapi import Request

UNKNOWN_IP = "unknown"


def clean_ip(raw_ip: str | None) -> str:
    """Normalize an IP address.

    Examples:
        >>> clean_ip("::ffff:10.0.0.7")
        '10.0.0.7'
        >>> clean_ip("::1")
        '127.0.0.1'
        >>> clean_ip(None)
        'unknown'
    """
    if not raw_ip:
        return UNKNOWN_IP

    ip = raw_ip.strip()
    if ip.startswith("::ffff:"):
        ip = ip[len("::ffff:") :]
    if ip == "::1":
        ip = "127.0.0.1"
    return ip or UNKNOWN_IP


def get_client_ip(request: Request, *, trust_proxy_headers: bool = False) -> str:
    """Resolve the client IP for a request.

    Args:
        request: Incoming request.
        trust_proxy_headers: Read X-Forwarded-For (first hop) and X-Real-IP
            before the socket peer address.

    Returns:
        Normalized IP, or "unknown".
    """
    if trust_proxy_headers:
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            first_hop = forwarded_for.split(",")[0].strip()
            if first_hop:
                return clean_ip(first_hop)
        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return clean_ip(real_ip)

    if request.client is not None:
        return clean_ip(request.client.host)
    return UNKNOWN_IP


def generate_device_fingerprint(user_agent: str | None, ip_address: str | None) -> str:
    """Generate SHA256 device fingerprint from user agent and IP.

    Examples:
        >>> len(generate_device_fingerprint("Mozilla/5.0", "10.0.0.7"))
        64
    """
    fingerprint_string = f"{user_agent or ''}-{ip_address or ''}"
    return hashlib.sha256(fingerprint_string.encode("utf-8")).hexdigest()


def parse_user_agent(user_agent: str | None) -> str:
    """Human-readable device name for a User-Agent string.

    Examples:
        >>> parse_user_agent("Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) Chrome/120.0 Safari/537.36")
        'Chrome on macOS'
        >>> parse_user_agent("")
        'Unknown Device'
    """
    if not user_agent:
        return "Unknown Device"

    if "Edg/" in user_agent:
        browser = "Edge"
    elif "Chrome/" in user_agent:
        browser = "Chrome"
    elif "Firefox/" in user_agent:
        browser = "Firefox"
    elif "Safari/" in user_agent:
        browser = "Safari"
    else:
        browser = "Unknown Browser"

    # iOS user agents also say "like Mac OS X"
    if "iPhone" in user_agent or "iPad" in user_agent:
        os_name = "iOS"
    elif "Windows NT 10" in user_agent:
        os_name = "Windows 10/11"
    elif "Windows" in user_agent:
        os_name = "Windows"
    elif "Mac OS X" in user_agent:
        os_name = "macOS"
    elif "Android" in user_agent:
        os_name = "Android"
    elif "Linux" in user_agent:
        os_name = "Linux"
    else:
        os_name = "Unknown OS"

    return f"{browser} on {os_name}"
