"""
Custom Icon Badges SDK - Python
Client for the custom icon badges API
"""

from typing import Any, Dict, List, Optional
from urllib.parse import quote, urlencode
import base64
import os

import requests


class IconBadgesError(Exception):
    """Raised when the API answers with an error envelope"""

    def __init__(self, status_code: int, message: str, body: Any = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.body = body


class IconBadgesClient:
    """Python client for the custom icon badges API"""

    def __init__(self, api_url: str = "https://custom-icon-badges.demolab.com"):
        """
        Initialise the client

        Args:
            api_url: Base URL of the service
        """
        self.api_url = api_url.rstrip('/')
        self.session = requests.Session()

    def _raise_for_envelope(self, response: requests.Response) -> None:
        if response.status_code < 400:
            return
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        raise IconBadgesError(
            response.status_code,
            payload.get("message", response.reason),
            payload.get("body"),
        )

    def list_icons(self) -> List[Dict[str, str]]:
        """
        List the custom icons

        Returns:
            List of icons with slug, type and data
        """
        response = self.session.get(f"{self.api_url}/icons")
        self._raise_for_envelope(response)
        return response.json()["icons"]

    def get_icon(self, slug: str) -> Dict[str, str]:
        response = self.session.get(f"{self.api_url}/icons/{quote(slug, safe='')}")
        self._raise_for_envelope(response)
        return response.json()

    def submit_icon(self, slug: str, type: str, data: str) -> Dict[str, str]:
        """
        Submit a new icon

        Args:
            slug: Name used as ``logo`` in badge URLs
            type: Image subtype, e.g. ``svg+xml`` or ``png``
            data: Base64 encoded image

        Returns:
            The created icon
        """
        response = self.session.post(
            f"{self.api_url}/icons",
            json={"slug": slug, "type": type, "data": data},
        )
        self._raise_for_envelope(response)
        return response.json()["body"]

    def submit_icon_file(self, slug: str, file_path: str) -> Dict[str, str]:
        """
        Submit an icon read from an SVG or PNG file

        Args:
            slug: Name used as ``logo`` in badge URLs
            file_path: Path to the image

        Returns:
            The created icon
        """
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"File not found: {file_path}")

        extension = os.path.splitext(file_path)[1].lower().lstrip('.')
        type = "svg+xml" if extension == "svg" else extension
        with open(file_path, 'rb') as f:
            data = base64.b64encode(f.read()).decode('ascii')
        return self.submit_icon(slug, type, data)

    def badge_url(self, path: str, logo: str, logo_color: Optional[str] = None, **params: str) -> str:
        """
        Build the URL of a badge using a custom logo

        Args:
            path: Badge path, e.g. ``badge/build-passing-green``
            logo: Icon slug
            logo_color: Optional color applied to SVG icons
            params: Extra shields.io parameters (``style``, ``label``...)
        """
        query: Dict[str, str] = {"logo": logo}
        if logo_color:
            query["logoColor"] = logo_color
        query.update(params)
        return f"{self.api_url}/{path.lstrip('/')}?{urlencode(query)}"


if __name__ == "__main__":
    client = IconBadgesClient(os.environ.get("ICONBADGES_API_URL", "http://localhost:8000"))
    for icon in client.list_icons():
        print(f"{icon['slug']} ({icon['type']})")
