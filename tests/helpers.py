"""Helper data for tests: a small resolved environment."""

from typing import Any, Dict, List


# ============================================================================
# Sample environment
# ============================================================================
# App depends on HTTP and JSON3; HTTP pulls in URIs and the Sockets stdlib;
# JSON3 and Plots both pull in Parsers.
# ============================================================================

PROJECT_UUID = "0b5a0d1c-61bc-4e4d-9d6f-1d9c3c1a7a10"
HTTP_UUID = "cd3eb016-35fb-5094-929b-558a96fad6f3"
URIS_UUID = "5c2747f8-b7ea-4ff2-ba2e-563bfd36b1d4"
SOCKETS_UUID = "6462fe0b-24de-5631-8697-dd941f90decc"
JSON3_UUID = "0f8b85d8-7281-11e9-16c2-39a750bddbf1"
PARSERS_UUID = "69de0a69-1ddd-5017-9359-2bf0b02dc9f0"
PLOTS_UUID = "91a5bcdd-55d7-5caf-9e0b-520d859cae80"


def sample_manifest() -> Dict[str, List[Dict[str, Any]]]:
    return {
        "HTTP": [
            {
                "uuid": HTTP_UUID,
                "version": "1.10.1",
                "git-tree-sha1": "abcdef0123456789abcdef0123456789abcdef01",
                "deps": ["URIs", "Sockets"],
            }
        ],
        "URIs": [{"uuid": URIS_UUID, "version": "1.5.1"}],
        "Sockets": [{"uuid": SOCKETS_UUID}],
        "JSON3": [{"uuid": JSON3_UUID, "version": "1.14.0", "deps": ["Parsers"]}],
        "Parsers": [{"uuid": PARSERS_UUID, "version": "2.8.1"}],
        "Plots": [{"uuid": PLOTS_UUID, "version": "1.40.0", "deps": ["Parsers"]}],
    }


def sample_project() -> Dict[str, Any]:
    return {
        "name": "App",
        "uuid": PROJECT_UUID,
        "authors": ["Dev Team <dev@example.com>"],
        "version": "0.3.0",
        "deps": {
            "HTTP": HTTP_UUID,
            "JSON3": JSON3_UUID,
            "Plots": PLOTS_UUID,
        },
        "compat": {
            "HTTP": "1.10",
            "JSON3": "1",
            "Plots": "1.40",
            "julia": "1.9",
        },
    }
