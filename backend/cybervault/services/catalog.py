"""Static label tables shared by the normalizers and fallback suppliers."""
from __future__ import annotations

from typing import Dict, List


THREAT_EMOJIS = ["👻", "🧙‍♀️", "🎃", "💀", "🦇", "🕷️", "🕸️", "⚰️"]
PULSE_EMOJIS = ["👻", "🧙‍♀️", "🪦", "🎃", "🕷️", "🦇", "💀", "🔮"]
MALWARE_EMOJIS = ["👻", "🧙‍♀️", "🪦", "🕷️", "🦇", "🎃", "💀", "🧟‍♂️"]

ENTITY_NAMES = [
    "PhantomStrike", "WitchCraft", "Graveyard", "Vampire", "Banshee",
    "Poltergeist", "Specter", "Wraith", "Ghoul", "Demon",
]
MALWARE_PREFIXES = ["Phantom", "Specter", "Wraith", "Shadow", "Ghost", "Banshee", "Poltergeist"]
MALWARE_TYPES = ["Malware", "Trojan", "Ransomware", "Spyware", "Rootkit", "Botnet"]
VULNERABILITY_TYPES = [
    "Remote Code Execution",
    "Privilege Escalation",
    "Buffer Overflow",
    "SQL Injection",
    "Cross-Site Scripting",
    "Authentication Bypass",
    "Path Traversal",
    "Memory Corruption",
]

# GNQL queries summarised on the statistics panel
THREAT_STAT_QUERIES = [
    "classification:malicious",
    "tags:malware",
    "tags:exploit",
    "tags:scanner",
]

DEVICE_PATTERNS: List[Dict[str, object]] = [
    {"name": "Security Camera", "emoji": "📹", "queries": ["webcam", "camera", "netcam", "axis camera"], "ports": [80, 8080, 554, 81]},
    {"name": "Smart Thermostat", "emoji": "🌡️", "queries": ["thermostat", "nest", "ecobee", "temperature"], "ports": [80, 443, 8080]},
    {"name": "Smart Doorbell", "emoji": "🔔", "queries": ["doorbell", "ring", "nest doorbell"], "ports": [80, 443, 8080]},
    {"name": "WiFi Router", "emoji": "📡", "queries": ["router", "mikrotik", "cisco", "netgear", "tp-link"], "ports": [80, 8080, 443, 8443]},
    {"name": "Smart Light", "emoji": "💡", "queries": ["philips hue", "smart light", "lifx", "bulb"], "ports": [80, 443]},
    {"name": "IoT Device", "emoji": "🏠", "queries": ["iot", "arduino", "raspberry pi", "esp8266"], "ports": [80, 8080]},
]

PROVIDER_DIRECTORY: Dict[str, Dict[str, str]] = {
    "shodan": {
        "name": "Shodan",
        "description": "Internet-connected device discovery and analysis",
        "signupUrl": "https://account.shodan.io/",
    },
    "virustotal": {
        "name": "VirusTotal",
        "description": "Malware analysis and file/URL scanning",
        "signupUrl": "https://www.virustotal.com/gui/my-apikey",
    },
    "greynoise": {
        "name": "GreyNoise",
        "description": "Internet background noise and scanning activity analysis",
        "signupUrl": "https://viz.greynoise.io/account/api-key",
    },
    "google": {
        "name": "Google Custom Search",
        "description": "Threat intelligence and OSINT searches",
        "signupUrl": "https://developers.google.com/custom-search/v1/introduction",
    },
    "otx": {
        "name": "AlienVault OTX",
        "description": "Threat intelligence and indicators of compromise",
        "signupUrl": "https://otx.alienvault.com/api",
    },
    "zoomeye": {
        "name": "ZoomEye",
        "description": "Cyberspace host and web application search",
        "signupUrl": "https://www.zoomeye.org/profile",
    },
}

MINIMUM_REQUIRED_PROVIDERS = ("shodan", "virustotal")
