"""Checks on ClusterServiceVersion fields required for publication."""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field
from urllib.parse import SplitResult, urlsplit

import semver

MIN_KUBE_VERSION_WARN_MESSAGE = (
    "csv.Spec.minKubeVersion is not informed. It is recommended you provide this information. "
    "Otherwise, it would mean that your operator project can be distributed and installed in any "
    "cluster version available, which is not necessarily the case for all projects."
)

VALID_MEDIATYPES = frozenset({"image/gif", "image/jpeg", "image/png", "image/svg+xml"})


@dataclass
class CSVChecks:
    """A CSV manifest together with the errors and warnings found on it."""

    csv: dict
    errs: list[str] = field(default_factory=list)
    warns: list[str] = field(default_factory=list)

    @property
    def spec(self) -> dict:
        return self.csv.get("spec") or {}


def check_spec_min_kube_version(checks: CSVChecks) -> CSVChecks:
    value = checks.spec.get("minKubeVersion")
    text = "" if value is None else str(value)
    if not text.strip():
        checks.warns.append(MIN_KUBE_VERSION_WARN_MESSAGE)
    else:
        try:
            semver.Version.parse(text)
        except ValueError:
            checks.errs.append(f"csv.Spec.MinKubeVersion has an invalid value: {text}")
    return checks


def check_spec_version(checks: CSVChecks) -> CSVChecks:
    value = checks.spec.get("version")
    unset = not value
    if not unset:
        try:
            unset = semver.Version.parse(str(value)) == semver.Version(0, 0, 0)
        except ValueError:
            unset = False
    if unset:
        checks.errs.append("csv.Spec.Version must be set")
    return checks


def check_spec_icon(checks: CSVChecks) -> CSVChecks:
    icons = checks.spec.get("icon")
    if icons is None:
        checks.warns.append("csv.Spec.Icon not specified")
        return checks
    if len(icons) != 1:
        checks.errs.append("csv.Spec.Icon should only have one element")
    if not icons:
        return checks
    icon = icons[0] or {}
    media_type = icon.get("mediatype") or ""
    data = icon.get("base64data") or ""
    if not media_type or not data:
        checks.errs.append("csv.Spec.Icon elements should contain both data and mediatype")
    if media_type and media_type not in VALID_MEDIATYPES:
        checks.errs.append(f"csv.Spec.Icon {media_type} does not have a valid mediatype")
    return checks


def check_spec_links(checks: CSVChecks) -> CSVChecks:
    for link in checks.spec.get("links") or []:
        name = link.get("name") or ""
        url = link.get("url") or ""
        if not name or not url:
            checks.errs.append("csv.Spec.Links elements should contain both name and url")
        if url:
            try:
                parse_request_uri(url)
            except ValueError as exc:
                checks.errs.append(f"csv.Spec.Links url {url} is invalid: {exc}")
    return checks


def check_spec_maintainers(checks: CSVChecks) -> CSVChecks:
    for maintainer in checks.spec.get("maintainers") or []:
        name = maintainer.get("name") or ""
        email = maintainer.get("email") or ""
        if not name or not email:
            checks.errs.append("csv.Spec.Maintainers elements should contain both name and email")
        if email:
            try:
                parse_mail_address(email)
            except ValueError as exc:
                checks.errs.append(f"csv.Spec.Maintainers email {email} is invalid: {exc}")
    return checks


def check_spec_provider_name(checks: CSVChecks) -> CSVChecks:
    provider = checks.spec.get("provider") or {}
    if not str(provider.get("name") or "").strip():
        checks.errs.append("csv.Spec.Provider.Name not specified")
    return checks


def extract_categories(path: str) -> set[str]:
    """Read a JSON file of the form {"categories": [...]} and return its categories."""
    path = os.path.abspath(path)
    try:
        with open(path, encoding="utf-8") as handle:
            raw = handle.read()
    except OSError as exc:
        raise ValueError(f"reading category file: {exc}") from exc
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"unmarshaling category file: {exc}") from exc
    if not isinstance(document, dict):
        raise ValueError("unmarshaling category file: expected a JSON object")
    contents = document.get("categories") or []
    if not isinstance(contents, list) or not all(isinstance(c, str) for c in contents):
        raise ValueError("unmarshaling category file: categories must be a list of strings")
    return set(contents)


_ATEXT = r"A-Za-z0-9!#$%&'*+\-/=?^_`{|}~\u0080-\U0010ffff"
_DOT_ATOM = rf"[{_ATEXT}]+(?:\.[{_ATEXT}]+)*"
_QUOTED = r'"(?:[^"\\]|\\.)*"'
_ADDR_SPEC = re.compile(rf"(?:{_DOT_ATOM}|{_QUOTED})@(?:{_DOT_ATOM}|\[[^\[\]\\]*\])")
_ATEXT_OR_DOT = re.compile(rf"[{_ATEXT}.]+")


def parse_mail_address(address: str) -> tuple[str, str]:
    """Parse a single mail address into (display name, addr-spec).

    Raises ValueError describing why the address is not valid.
    """
    text = address.strip()
    if not text:
        raise ValueError("mail: no address")
    if _ADDR_SPEC.fullmatch(text):
        return "", text
    if "<" in text:
        display, _, rest = text.partition("<")
        rest = rest.rstrip()
        if not rest.endswith(">"):
            raise ValueError("mail: unclosed angle-addr")
        inner = rest[:-1].strip()
        if not _ADDR_SPEC.fullmatch(inner):
            if "@" not in inner:
                raise ValueError("mail: missing @ in addr-spec")
            raise ValueError("mail: invalid addr-spec")
        display = display.strip()
        if len(display) >= 2 and display[0] == display[-1] == '"':
            display = display[1:-1]
        return display, inner
    if "@" in text:
        raise ValueError("mail: invalid address")
    if _ATEXT_OR_DOT.fullmatch(text):
        raise ValueError("mail: missing '@' or angle-addr")
    raise ValueError("mail: no angle-addr")


def _url_error(raw: str, reason: str) -> ValueError:
    return ValueError(f"parse {json.dumps(raw, ensure_ascii=False)}: {reason}")


def _split_scheme(raw: str) -> tuple[str, str]:
    for index, char in enumerate(raw):
        if char.isascii() and char.isalpha():
            continue
        if char.isascii() and (char.isdigit() or char in "+-."):
            if index == 0:
                return "", raw
            continue
        if char == ":":
            if index == 0:
                raise _url_error(raw, "missing protocol scheme")
            return raw[:index].lower(), raw[index + 1:]
        return "", raw
    return "", raw


def _check_authority(raw: str, rest: str) -> None:
    authority = rest[2:].split("/", 1)[0]
    host = authority.rpartition("@")[2]
    if host.startswith("["):
        end = host.find("]")
        if end < 0:
            raise _url_error(raw, "missing ']' in host")
        port_part = host[end + 1:]
        if port_part and not port_part.startswith(":"):
            raise _url_error(raw, f"invalid port {json.dumps(port_part)} after host")
    else:
        colon = host.rfind(":")
        port_part = host[colon:] if colon >= 0 else ""
    if port_part and not port_part[1:].isdigit() and port_part != ":":
        raise _url_error(raw, f"invalid port {json.dumps(port_part)} after host")


def parse_request_uri(raw: str) -> SplitResult:
    """Parse a URL that must be absolute or an absolute path.

    Raises ValueError when it is not usable as a request URI.
    """
    if not raw:
        raise _url_error(raw, "empty url")
    if any(ord(char) < 0x20 or ord(char) == 0x7F for char in raw):
        raise _url_error(raw, "net/url: invalid control character in URL")
    if raw == "*":
        return urlsplit(raw)
    scheme, rest = _split_scheme(raw)
    if not rest.startswith("/") and not scheme:
        raise _url_error(raw, "invalid URI for request")
    if rest.startswith("//"):
        _check_authority(raw, rest)
    return urlsplit(raw)