"""
Cookie codec for request Cookie headers and response Set-Cookie values.

Values are percent-encoded with the same safe set as JavaScript's
encodeURIComponent so cookies written by this service stay readable by
browser code and vice versa.
"""

from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import quote, unquote

COOKIE_VALUE_SAFE = "!~*'()"

SAME_SITE_VALUES = {"strict": "Strict", "lax": "Lax", "none": "None"}


def encode_cookie_value(value: str) -> str:
    return quote(value, safe=COOKIE_VALUE_SAFE)


def decode_cookie_value(value: str) -> str:
    return unquote(value)


def parse_cookie_header(header: Optional[str]) -> Dict[str, str]:
    """
    Parse a request Cookie header into a name -> value mapping.

    Pairs without "=" or with an empty name are skipped. The first
    occurrence of a name wins, matching how browsers order cookies
    (most specific path first).
    """
    cookies: Dict[str, str] = {}
    if not header:
        return cookies

    for pair in header.split(";"):
        name, sep, value = pair.partition("=")
        name = name.strip()
        if not sep or not name or name in cookies:
            continue
        cookies[name] = decode_cookie_value(value.strip())
    return cookies


def get_cookie_value(header: Optional[str], name: str) -> Optional[str]:
    """Return the decoded value of cookie `name`, or None if absent."""
    return parse_cookie_header(header).get(name)


@dataclass(frozen=True)
class Cookie:
    """A response cookie with explicit attributes."""
    name: str
    value: str
    path: Optional[str] = "/"
    max_age: Optional[int] = None
    http_only: bool = False
    same_site: Optional[str] = None
    secure: bool = False

    def serialize(self) -> str:
        """Render as a Set-Cookie header value."""
        attributes = [f"{self.name}={encode_cookie_value(self.value)}"]
        if self.path is not None:
            attributes.append(f"Path={self.path}")
        if self.max_age is not None:
            attributes.append(f"Max-Age={self.max_age}")
        if self.http_only:
            attributes.append("HttpOnly")
        if self.same_site is not None:
            attributes.append(f"SameSite={SAME_SITE_VALUES.get(self.same_site.lower(), self.same_site)}")
        if self.secure:
            attributes.append("Secure")
        return "; ".join(attributes)

    @classmethod
    def parse(cls, set_cookie: str) -> "Cookie":
        """
        Parse a Set-Cookie header value.

        Attribute names are matched case-insensitively; unknown attributes
        (Domain, Expires, ...) are ignored.

        Raises:
            ValueError: If the header has no name=value pair
        """
        first, *attribute_parts = set_cookie.split(";")
        name, sep, value = first.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Invalid Set-Cookie value: {set_cookie!r}")

        path = None
        max_age = None
        http_only = False
        same_site = None
        secure = False

        for part in attribute_parts:
            key, _, attr_value = part.strip().partition("=")
            key = key.lower()
            if key == "path":
                path = attr_value
            elif key == "max-age":
                max_age = int(attr_value)
            elif key == "httponly":
                http_only = True
            elif key == "samesite":
                same_site = SAME_SITE_VALUES.get(attr_value.lower(), attr_value)
            elif key == "secure":
                secure = True

        return cls(
            name=name,
            value=decode_cookie_value(value.strip()),
            path=path,
            max_age=max_age,
            http_only=http_only,
            same_site=same_site,
            secure=secure,
        )
