import re


_CONTROL_CHARS = re.compile(r"[\u0000-\u001F\u007F-\u009F]")
_ZERO_WIDTH = re.compile(r"[\u200B-\u200D\uFEFF]")


def sanitize_text(s: str) -> str:
    """Make free text safe for a CSV cell shown in Shopify admin."""
    if not s:
        return ""
    s = s.replace("’", "'").replace("‘", "'")
    s = s.replace("“", '"').replace("”", '"')
    s = _CONTROL_CHARS.sub("", s)
    s = _ZERO_WIDTH.sub("", s)
    return s.strip()


def catalog_base_name(filename: str) -> str:
    # rockyboots_catalog.xml -> rockyboots, outlet.xml -> outlet
    name = filename
    if name.endswith("_catalog.xml"):
        return name[: -len("_catalog.xml")]
    if name.endswith(".xml"):
        return name[: -len(".xml")]
    return name
