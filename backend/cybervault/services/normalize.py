"""Map raw provider payloads onto the dashboard's record shapes.

Every function here is pure: same payload (and same ``now``) in, same
records out. Only allow-listed fields are copied, optional fields get a
default, long text is truncated and result lists are capped.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from ..models.devices import IoTDevice
from ..models.indicators import IndicatorItem
from ..models.reputation import IPReputation
from ..models.search import (
    SearchResultItem,
    ShodanLocation,
    ShodanMatch,
    ShodanSearchResponse,
    ZoomEyeLocation,
    ZoomEyeMatch,
    ZoomEyeResults,
)
from ..models.threats import ThreatItem, ThreatStat, VulnerabilityItem
from ..utils.clock import utcnow
from .catalog import (
    ENTITY_NAMES,
    MALWARE_EMOJIS,
    MALWARE_PREFIXES,
    MALWARE_TYPES,
    PULSE_EMOJIS,
    THREAT_EMOJIS,
    VULNERABILITY_TYPES,
)


PREVIEW_MAX_CHARS = 200
GREYNOISE_THREAT_LIMIT = 3
OTX_PULSE_LIMIT = 5
SHODAN_MATCH_LIMIT = 10
VIRUSTOTAL_LIMIT = 5

CVE_RE = re.compile(r"CVE-\d{4}-\d{4,7}", re.IGNORECASE)

GOOGLE_RESPONSE_FIELDS = ("kind", "url", "queries", "context", "searchInformation")
GOOGLE_ITEM_FIELDS = (
    "kind", "title", "htmlTitle", "link", "displayLink", "snippet", "htmlSnippet",
    "cacheId", "formattedUrl", "htmlFormattedUrl", "pagemap",
)


def _now(now: Optional[datetime]) -> datetime:
    return now or utcnow()


def truncate(text: Any, limit: int = PREVIEW_MAX_CHARS, ellipsis: str = "") -> str:
    if not text:
        return ""
    value = str(text)
    if len(value) <= limit:
        return value
    return value[:limit] + ellipsis


def parse_timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _hours_since(value: Any, now: Optional[datetime]) -> Optional[int]:
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return int((_now(now) - parsed).total_seconds() // 3600)


def format_last_seen(value: Any, now: Optional[datetime] = None) -> str:
    hours = _hours_since(value, now)
    if hours is None:
        return "recently"
    if hours < 1:
        return "less than 1 hour ago"
    if hours < 24:
        return f"{hours} hours ago"
    return f"{hours // 24} days ago"


def format_time_ago(value: Any, now: Optional[datetime] = None) -> str:
    hours = _hours_since(value, now)
    if hours is None:
        return "Unknown"
    if hours < 1:
        return "Less than 1 hour ago"
    if hours < 24:
        return f"{hours} hours ago"
    if hours < 48:
        return "1 day ago"
    return f"{hours // 24} days ago"


def format_epoch_age(epoch: Any, now: Optional[datetime] = None) -> str:
    if not epoch:
        return "Unknown"
    try:
        then = datetime.fromtimestamp(float(epoch), tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        return "Unknown"
    minutes = int((_now(now) - then).total_seconds() // 60)
    hours = minutes // 60
    days = hours // 24
    if minutes < 60:
        return f"{minutes} min ago"
    if hours < 24:
        return f"{hours} hour{'' if hours == 1 else 's'} ago"
    return f"{days} day{'' if days == 1 else 's'} ago"


# ---------------------------------------------------------------- GreyNoise

def threat_level(classification: str, noise: bool) -> str:
    if classification == "malicious":
        return "high"
    if classification == "benign" and noise:
        return "low"
    if noise:
        return "medium"
    return "unknown"


def spooky_description(context: Dict[str, Any]) -> str:
    if context.get("classification") == "malicious":
        return "This IP haunts the digital realm with malicious intent. It has been spotted casting dark spells across the internet."
    if context.get("riot"):
        return "This IP belongs to a known digital entity in the GreyNoise RIOT dataset - generally trustworthy but active."
    if context.get("noise"):
        return "This IP creates digital noise in the ether - it's actively scanning or probing the internet."
    return "This IP appears to be a quiet spirit, not making much noise in the digital realm."


def classification_emoji(classification: str) -> str:
    if classification == "malicious":
        return "💀"
    if classification == "benign":
        return "👻"
    return "🔮"


def normalize_ip_context(ip: str, context: Dict[str, Any], now: Optional[datetime] = None) -> IPReputation:
    raw = str(context.get("classification") or "unknown").lower()
    classification = raw if raw in ("malicious", "benign", "unknown") else "unknown"
    noise = bool(context.get("noise"))
    return IPReputation(
        ip=ip,
        is_noisy=noise,
        is_riot=bool(context.get("riot")),
        classification=classification,
        threat_level=threat_level(classification, noise),
        last_seen=context.get("last_seen"),
        spooky_description=spooky_description({**context, "classification": classification}),
        emoji=classification_emoji(classification),
        source="greynoise",
        timestamp=_now(now).isoformat(),
    )


def normalize_greynoise_threats(threats: Iterable[Dict[str, Any]], now: Optional[datetime] = None) -> List[ThreatItem]:
    items: List[ThreatItem] = []
    for index, threat in enumerate(list(threats)[:GREYNOISE_THREAT_LIMIT]):
        entity = ENTITY_NAMES[index % len(ENTITY_NAMES)]
        tags = threat.get("tags") or []
        classification = threat.get("classification")

        severity = "medium"
        if classification == "malicious" and ("exploit" in tags or "malware" in tags):
            severity = "high"

        description = "Mysterious digital entity detected"
        if "scanner" in tags:
            description = f"{entity} scanning rituals targeting vulnerable systems"
        elif "malware" in tags:
            description = f"{entity} malware haunting network infrastructure"
        elif "exploit" in tags:
            description = f"{entity} exploitation spells being cast"

        items.append(ThreatItem(
            name=f"{entity} Entity",
            severity=severity,
            description=description,
            first_seen=format_last_seen(threat.get("last_seen"), now),
            emoji=THREAT_EMOJIS[index % len(THREAT_EMOJIS)],
            source="greynoise",
            ip=threat.get("ip"),
            classification=classification,
        ))
    return items


def normalize_threat_stat(query: str, payload: Dict[str, Any]) -> ThreatStat:
    return ThreatStat(
        query=payload.get("query") or query,
        count=int(payload.get("count") or 0),
        stats=payload.get("stats") or {},
    )


# ---------------------------------------------------------------- OTX

def pulse_severity(pulse: Dict[str, Any]) -> str:
    if pulse.get("malware_families"):
        return "high"
    if pulse.get("attack_ids"):
        return "high"
    if len(pulse.get("indicators") or []) > 10:
        return "medium"
    return "low"


def normalize_otx_pulses(pulses: Iterable[Dict[str, Any]], now: Optional[datetime] = None) -> List[ThreatItem]:
    items: List[ThreatItem] = []
    for index, pulse in enumerate(list(pulses)[:OTX_PULSE_LIMIT]):
        items.append(ThreatItem(
            name=pulse.get("name") or "Unnamed pulse",
            severity=pulse_severity(pulse),
            description=pulse.get("description") or "No description available",
            first_seen=format_time_ago(pulse.get("created"), now),
            emoji=PULSE_EMOJIS[index % len(PULSE_EMOJIS)],
            source="AlienVault OTX",
            tags=list(pulse.get("tags") or []),
            malware_families=[str(f) for f in pulse.get("malware_families") or []],
            indicators=len(pulse.get("indicators") or []),
        ))
    return items


def ioc_severity(ioc_type: str) -> str:
    if ioc_type in ("FileHash-SHA256", "FileHash-MD5"):
        return "high"
    if ioc_type in ("IPv4", "hostname"):
        return "medium"
    if ioc_type == "domain":
        return "low"
    return "medium"


def normalize_otx_indicators(indicators: Iterable[Dict[str, Any]], limit: Optional[int] = None) -> List[IndicatorItem]:
    rows = list(indicators)
    if limit is not None:
        rows = rows[:limit]
    items: List[IndicatorItem] = []
    for row in rows:
        if not row.get("indicator"):
            continue
        ioc_type = str(row.get("type") or "unknown")
        items.append(IndicatorItem(
            indicator=str(row["indicator"]),
            type=ioc_type,
            description=row.get("description") or f"{ioc_type} indicator from OTX",
            created=str(row.get("created") or ""),
            severity=ioc_severity(ioc_type),
            source="AlienVault OTX",
        ))
    return items


# ---------------------------------------------------------------- Shodan

def normalize_shodan_results(payload: Dict[str, Any], limit: int) -> List[SearchResultItem]:
    results: List[SearchResultItem] = []
    for match in (payload.get("matches") or [])[:limit]:
        location = match.get("location") or {}
        results.append(SearchResultItem(
            ip=str(match.get("ip_str") or "Unknown"),
            port=int(match.get("port") or 0),
            hostnames=list(match.get("hostnames") or []),
            organization=match.get("org") or "Unknown",
            os=match.get("os") or "Unknown",
            country=location.get("country_name") or "Unknown",
            city=location.get("city") or "Unknown",
            timestamp=match.get("timestamp"),
            preview=truncate(match.get("data")),
        ))
    return results


def normalize_shodan_matches(payload: Dict[str, Any]) -> ShodanSearchResponse:
    matches: List[ShodanMatch] = []
    for match in (payload.get("matches") or [])[:SHODAN_MATCH_LIMIT]:
        location = match.get("location") or {}
        matches.append(ShodanMatch(
            ip=match.get("ip_str"),
            port=match.get("port"),
            org=match.get("org") or "Unknown",
            hostnames=list(match.get("hostnames") or []),
            location=ShodanLocation(
                country_name=location.get("country_name") or "Unknown",
                city=location.get("city") or "Unknown",
            ),
            data=truncate(match.get("data"), ellipsis="...") if match.get("data") else "",
            product=match.get("product") or "Unknown",
            version=match.get("version") or "",
            timestamp=match.get("timestamp"),
            transport=match.get("transport") or "tcp",
        ))
    return ShodanSearchResponse(
        total=int(payload.get("total") or 0),
        matches=matches,
        facets=payload.get("facets") or {},
    )


def device_status(match: Dict[str, Any]) -> Dict[str, Any]:
    banner = str(match.get("data") or "")
    lowered = banner.lower()
    findings = 0
    if "admin:admin" in lowered:
        findings += 1
    if "password:password" in lowered:
        findings += 1
    if "default" in lowered:
        findings += 1
    if not match.get("product") or match.get("product") == "Unknown":
        findings += 1
    if match.get("port") in (21, 23):
        findings += 1
    if "200 OK" in banner and "authentication" not in banner:
        findings += 1

    if findings >= 3:
        return {"status": "critical", "vulnerabilities": findings, "risk": "Critical"}
    if findings >= 1:
        return {"status": "warning", "vulnerabilities": findings, "risk": "Medium"}
    return {"status": "secure", "vulnerabilities": findings, "risk": "Low"}


def normalize_iot_device(pattern: Dict[str, Any], payload: Dict[str, Any]) -> Optional[IoTDevice]:
    matches = payload.get("matches") or []
    if not matches:
        return None
    match = matches[0]
    location = match.get("location") or {}
    return IoTDevice(
        name=str(pattern["name"]),
        emoji=str(pattern["emoji"]),
        ip=str(match.get("ip_str") or "Unknown"),
        port=int(match.get("port") or 0),
        org=match.get("org") or "Unknown Organization",
        location=f"{location.get('city') or 'Unknown'}, {location.get('country_name') or 'Unknown'}",
        product=match.get("product") or "Unknown",
        last_scan="Just now",
        **device_status(match),
    )


# ---------------------------------------------------------------- ZoomEye

def _geo_location(geoinfo: Dict[str, Any]) -> ZoomEyeLocation:
    country = (geoinfo.get("country") or {}).get("names") or {}
    city = (geoinfo.get("city") or {}).get("names") or {}
    coords = geoinfo.get("location") or {}
    return ZoomEyeLocation(
        country=country.get("en") or "Unknown",
        city=city.get("en") or "Unknown",
        latitude=coords.get("latitude"),
        longitude=coords.get("longitude"),
    )


def _label(value: Any) -> Optional[str]:
    # web results report webapp either as a name or as a list of {name, version}
    if not value:
        return None
    if isinstance(value, list):
        names = [str(v.get("name")) if isinstance(v, dict) else str(v) for v in value]
        return ", ".join(n for n in names if n and n != "None") or None
    return str(value)


def normalize_zoomeye_hosts(payload: Dict[str, Any]) -> ZoomEyeResults:
    matches: List[ZoomEyeMatch] = []
    for match in payload.get("matches") or []:
        portinfo = match.get("portinfo") or {}
        geoinfo = match.get("geoinfo") or {}
        matches.append(ZoomEyeMatch(
            ip=str(match.get("ip") or "Unknown"),
            port=int(portinfo.get("port") or 0),
            protocol=portinfo.get("service") or "Unknown",
            banner=truncate(portinfo.get("banner")),
            timestamp=match.get("timestamp"),
            location=_geo_location(geoinfo),
            organization=geoinfo.get("organization") or None,
            service=portinfo.get("service") or None,
            version=portinfo.get("version") or None,
        ))
    return ZoomEyeResults(
        total=int(payload.get("total") or 0),
        available=int(payload.get("available") or 0),
        matches=matches,
    )


def normalize_zoomeye_web(payload: Dict[str, Any]) -> ZoomEyeResults:
    matches: List[ZoomEyeMatch] = []
    for match in payload.get("matches") or []:
        geoinfo = match.get("geoinfo") or {}
        ip = match.get("ip")
        if isinstance(ip, list):
            ip = ip[0] if ip else None
        webapp = _label(match.get("webapp"))
        matches.append(ZoomEyeMatch(
            ip=str(ip or "Unknown"),
            port=int(match.get("port") or 80),
            protocol="HTTP",
            banner=truncate(webapp or _label(match.get("title")) or ""),
            timestamp=match.get("timestamp"),
            location=_geo_location(geoinfo),
            organization=geoinfo.get("organization") or None,
            service=webapp,
            version=_label(match.get("version")),
        ))
    return ZoomEyeResults(
        total=int(payload.get("total") or 0),
        available=int(payload.get("available") or 0),
        matches=matches,
    )


def normalize_zoomeye_user(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "plan": payload.get("plan") or "Unknown",
        "resources": payload.get("resources") or {},
        "quota": payload.get("quota") or {},
        "email": payload.get("email") or "Unknown",
    }


# ---------------------------------------------------------------- Google

def normalize_google_response(payload: Dict[str, Any]) -> Dict[str, Any]:
    body = {key: payload[key] for key in GOOGLE_RESPONSE_FIELDS if key in payload}
    if "items" in payload:
        body["items"] = [
            {key: item[key] for key in GOOGLE_ITEM_FIELDS if key in item}
            for item in payload.get("items") or []
        ]
    return body


# ---------------------------------------------------------------- VirusTotal

def _analysis_counts(item: Dict[str, Any]) -> tuple[int, int]:
    stats = (item.get("attributes") or {}).get("last_analysis_stats") or {}
    malicious = int(stats.get("malicious") or 0)
    total = sum(int(v or 0) for v in stats.values())
    return malicious, total


def threat_display_name(original: str, index: int) -> str:
    if len(original) > 30:
        prefix = MALWARE_PREFIXES[index % len(MALWARE_PREFIXES)]
        kind = MALWARE_TYPES[index % len(MALWARE_TYPES)]
        return f"{prefix} {kind}"
    return original


def normalize_vt_threats(items: Iterable[Dict[str, Any]], now: Optional[datetime] = None) -> List[ThreatItem]:
    threats: List[ThreatItem] = []
    for index, item in enumerate(list(items)[:VIRUSTOTAL_LIMIT]):
        attributes = item.get("attributes") or {}
        malicious, total = _analysis_counts(item)
        original = attributes.get("meaningful_name") or item.get("id") or f"Threat-{index + 1}"
        if malicious >= 30:
            severity = "high"
        elif malicious >= 15:
            severity = "medium"
        else:
            severity = "low"
        threats.append(ThreatItem(
            name=threat_display_name(str(original), index),
            severity=severity,
            description=f"Detected by {malicious}/{total} security vendors",
            first_seen=format_epoch_age(attributes.get("first_submission_date"), now),
            emoji=MALWARE_EMOJIS[index % len(MALWARE_EMOJIS)],
            source="VirusTotal",
            detection_ratio=f"{malicious}/{total}",
            sha256=item.get("id"),
        ))
    return threats


def extract_cve_id(names: Iterable[Any]) -> Optional[str]:
    for name in names:
        match = CVE_RE.search(str(name))
        if match:
            return match.group(0).upper()
    return None


def estimate_cvss(malicious: int, total: int) -> float:
    """Interpolate a CVSS-like score inside the band the detection ratio falls in."""
    if total == 0:
        return 0.0
    ratio = malicious / total
    if ratio >= 0.8:
        score = 9.0 + (ratio - 0.8) / 0.2 * 1.0
    elif ratio >= 0.6:
        score = 7.0 + (ratio - 0.6) / 0.2 * 2.0
    elif ratio >= 0.3:
        score = 4.0 + (ratio - 0.3) / 0.3 * 3.0
    else:
        score = 1.0 + ratio / 0.3 * 3.0
    return round(min(score, 10.0), 1)


def cve_emoji(malicious: int) -> str:
    if malicious >= 25:
        return "🚨"
    if malicious >= 15:
        return "⚠️"
    if malicious >= 5:
        return "🔐"
    return "📂"


def normalize_vt_cves(items: Iterable[Dict[str, Any]]) -> List[VulnerabilityItem]:
    cves: List[VulnerabilityItem] = []
    for index, item in enumerate(list(items)[:VIRUSTOTAL_LIMIT]):
        attributes = item.get("attributes") or {}
        malicious, total = _analysis_counts(item)
        cve_id = extract_cve_id(attributes.get("names") or []) or f"CVE-2024-{index + 1:05d}"
        if malicious >= 25:
            severity = "critical"
        elif malicious >= 15:
            severity = "high"
        elif malicious >= 5:
            severity = "medium"
        else:
            severity = "low"
        cves.append(VulnerabilityItem(
            id=cve_id,
            title=VULNERABILITY_TYPES[index % len(VULNERABILITY_TYPES)],
            severity=severity,
            cvss=estimate_cvss(malicious, total),
            description=f"Security vulnerability detected by {malicious}/{total} vendors",
            affected="Various systems and applications",
            status="investigating" if malicious > 0 else "monitoring",
            emoji=cve_emoji(malicious),
        ))
    return cves
