# File: version_check.py
"""
version_check.py

Looks up the latest release tag so the console header can tell whether
this copy is current.
"""
import requests

LOCAL_VERSION = "v0.3.0"


def fetch_remote_version(version_api, timeout=5):
    try:
        r = requests.get(version_api, timeout=timeout)
        r.raise_for_status()
        return r.json().get('tag_name', '') or ''
    except (requests.RequestException, ValueError):
        return ''


def check_version(version_api, local_version=LOCAL_VERSION, timeout=5):
    if not version_api:
        return "unknown"
    remote_version = fetch_remote_version(version_api, timeout=timeout)
    if remote_version == local_version:
        return "latest"
    if remote_version:
        return f"please update ({remote_version})"
    return "unknown"
