"""Deterministic stand-in records for when live provider data is unavailable.

Each supplier returns fresh model instances built from fixed tables; the
``source`` field tells the dashboard the data is not live.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from ..models.devices import IoTDevice
from ..models.indicators import IndicatorItem
from ..models.search import SearchResultItem
from ..models.threats import ThreatItem, ThreatStat, VulnerabilityItem
from ..utils.clock import utcnow
from .catalog import DEVICE_PATTERNS


def greynoise_offline_threats() -> List[ThreatItem]:
    return [
        ThreatItem(name="PhantomStrike Ransomware", severity="high", description="Active targeting of healthcare systems",
                   first_seen="2 hours ago", emoji="👻", source="fallback"),
        ThreatItem(name="WitchCraft Botnet", severity="medium", description="IoT device infections spreading",
                   first_seen="6 hours ago", emoji="🧙‍♀️", source="fallback"),
        ThreatItem(name="Graveyard Phishing", severity="high", description="Halloween-themed email campaigns",
                   first_seen="12 hours ago", emoji="🪦", source="fallback"),
    ]


def greynoise_error_threats() -> List[ThreatItem]:
    return [
        ThreatItem(name="Connection Phantom", severity="medium", description="Unable to commune with threat spirits",
                   first_seen="unknown", emoji="👻", source="error_fallback"),
    ]


def threat_stat_default(query: str) -> ThreatStat:
    return ThreatStat(query=query, count=0, stats={})


def otx_pulse_error() -> List[ThreatItem]:
    return [
        ThreatItem(name="OTX API Connection Error", severity="medium",
                   description="Unable to fetch live threat data. Check API configuration.",
                   first_seen="Now", emoji="⚠️", source="System Alert"),
    ]


def otx_indicator_error(now: Optional[datetime] = None) -> List[IndicatorItem]:
    return [
        IndicatorItem(indicator="API_CONNECTION_ERROR", type="system",
                      description="Unable to fetch live IOC data. Check OTX API configuration.",
                      created=(now or utcnow()).isoformat(), severity="medium", source="System Alert"),
    ]


SHODAN_DEMO_NOTE = "Demo data - Shodan API key not configured"

_SHODAN_DEMO_ROWS = [
    ("192.168.1.100", 80, ["home-router.local"], "Residential ISP", "Linux 2.6", "United States", "San Francisco",
     "HTTP/1.1 200 OK Server: nginx/1.14.2"),
    ("203.0.113.45", 8080, ["smart-thermostat.example.com"], "Smart Home Corp", "Unknown", "Canada", "Toronto",
     "Smart Thermostat Control Panel - Please Login"),
    ("198.51.100.78", 443, [], "University of Technology", "Windows Server 2019", "United Kingdom", "London",
     "HTTPS/1.1 SSL Certificate - Secure Connection"),
    ("172.16.0.50", 631, ["printer-lab.edu"], "Educational Network", "CUPS/2.3.0", "Germany", "Berlin",
     "Internet Printing Protocol - CUPS Print Server"),
    ("10.0.0.25", 554, ["camera-01.security.local"], "Security Systems Inc", "Linux ARM", "Australia", "Sydney",
     "RTSP/1.0 200 OK - Video Streaming Server"),
]


def shodan_demo_results(now: Optional[datetime] = None) -> List[SearchResultItem]:
    stamp = (now or utcnow()).isoformat()
    return [
        SearchResultItem(ip=ip, port=port, hostnames=list(hostnames), organization=org, os=os_name,
                         country=country, city=city, timestamp=stamp, preview=preview)
        for ip, port, hostnames, org, os_name, country, city, preview in _SHODAN_DEMO_ROWS
    ]


def iot_placeholder_device(index: int) -> IoTDevice:
    pattern = DEVICE_PATTERNS[index % len(DEVICE_PATTERNS)]
    return IoTDevice(
        name=str(pattern["name"]),
        emoji=str(pattern["emoji"]),
        ip="0.0.0.0",
        port=int(pattern["ports"][0]),  # type: ignore[index]
        org="No live data available",
        location="Configure SHODAN_API_KEY",
        product="Unknown",
        last_scan="N/A",
        status="unknown",
        vulnerabilities=0,
        risk="Unknown",
    )


def virustotal_demo_threats() -> List[ThreatItem]:
    return [
        ThreatItem(name="PhantomStrike Ransomware", severity="high", description="Active targeting of healthcare systems",
                   first_seen="2 hours ago", emoji="👻", source="Demo Data"),
        ThreatItem(name="WitchCraft Botnet", severity="medium", description="IoT device infections spreading",
                   first_seen="6 hours ago", emoji="🧙‍♀️", source="Demo Data"),
        ThreatItem(name="Graveyard Phishing", severity="high", description="Halloween-themed email campaigns",
                   first_seen="12 hours ago", emoji="🪦", source="Demo Data"),
    ]


def virustotal_demo_cves() -> List[VulnerabilityItem]:
    return [
        VulnerabilityItem(id="CVE-2023-44487", title="HTTP/2 Rapid Reset Attack", severity="critical", cvss=9.8,
                          description="DDoS vulnerability affecting HTTP/2 implementations",
                          affected="Web servers, Load balancers", status="patch-available", emoji="🚨"),
        VulnerabilityItem(id="CVE-2023-42793", title="JetBrains TeamCity Authentication Bypass", severity="high", cvss=8.1,
                          description="Authentication bypass in TeamCity server",
                          affected="TeamCity instances", status="patch-available", emoji="🔐"),
    ]
