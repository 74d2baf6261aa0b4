"""Level backdrop provider (decorative video per level)."""
import asyncio
import json
import logging
import aiohttp
from typing import Optional, Any, List

from ..config import get_settings
from ..core.exceptions import AssetFetchError

logger = logging.getLogger(__name__)


# Built-in catalog used when no remote manifest is configured
DEFAULT_BACKDROPS = [
    "https://player.vimeo.com/external/370331493.sd.mp4?s=33d548605da61cf2a0515450a0146f6c32b7ad9e&profile_id=139&oauth2_token_id=57447761",
    "https://player.vimeo.com/external/370331493.sd.mp4?s=33d548605da61cf2a0515450a0146f6c32b7ad9e&profile_id=139&oauth2_token_id=57447761",
    "https://player.vimeo.com/external/434045526.sd.mp4?s=c27db0607693d93253deabc12730b4ff3e65d076&profile_id=139&oauth2_token_id=57447761",
    "https://player.vimeo.com/external/481139424.sd.mp4?s=5ef44dca7656025e03393b3f94e245631f7a82ef&profile_id=139&oauth2_token_id=57447761",
    "https://player.vimeo.com/external/370331493.sd.mp4?s=33d548605da61cf2a0515450a0146f6c32b7ad9e&profile_id=139&oauth2_token_id=57447761",
]


def parse_backdrop_manifest(data: Any) -> List[str]:
    """
    Parse a backdrop manifest.

    Accepted formats:
        ["url1", "url2", ...]
        {"backdrops": ["url1", "url2", ...]}

    Raises:
        AssetFetchError: If the manifest holds no usable URLs.
    """
    if isinstance(data, dict):
        data = data.get("backdrops")

    if not isinstance(data, list):
        raise AssetFetchError("Backdrop manifest must be a list of URLs")

    urls = [u for u in data if isinstance(u, str) and u.strip()]
    if not urls:
        raise AssetFetchError("Backdrop manifest is empty")

    return urls


class BackdropClient:
    """Resolves the backdrop for a level from a small fixed catalog."""

    def __init__(
        self,
        manifest_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        catalog: Optional[List[str]] = None,
    ):
        """
        Initialize backdrop client.

        Args:
            manifest_url: URL of a JSON manifest to load the catalog from.
                Falls back to settings; the built-in catalog is used when unset.
            timeout_s: Request timeout for the manifest fetch.
            catalog: Explicit catalog, overriding both of the above.
        """
        settings = get_settings()
        self.manifest_url = manifest_url or settings.backdrop_manifest_url
        self.timeout_s = timeout_s if timeout_s is not None else settings.backdrop_timeout_s

        self._catalog: Optional[List[str]] = None
        if catalog is not None:
            self._catalog = list(catalog)
        elif not self.manifest_url:
            self._catalog = list(DEFAULT_BACKDROPS)

    @property
    def is_remote(self) -> bool:
        """Whether the catalog comes from a remote manifest."""
        return self._catalog is None

    async def get_catalog(self) -> List[str]:
        """Return the catalog, fetching the manifest on first use."""
        if self._catalog is None:
            self._catalog = await self._fetch_manifest()
        return self._catalog

    async def get_level_backdrop(self, level: int) -> str:
        """
        Get the backdrop URL for a level.

        Args:
            level: Level number (1-based).

        Returns:
            Catalog entry at ``(level - 1) mod len(catalog)``.

        Raises:
            AssetFetchError: If the remote manifest cannot be loaded.
        """
        catalog = await self.get_catalog()
        return catalog[(level - 1) % len(catalog)]

    async def _fetch_manifest(self) -> List[str]:
        """Load the catalog from the configured manifest URL."""
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(
                    self.manifest_url,
                    timeout=aiohttp.ClientTimeout(total=self.timeout_s),
                ) as response:
                    if response.status != 200:
                        raise AssetFetchError(f"Manifest server returned {response.status}")

                    raw = await response.read()
                    charset = response.charset or "utf-8"

        except aiohttp.ClientError as e:
            raise AssetFetchError(f"Connection error: {str(e)}") from e
        except asyncio.TimeoutError as e:
            raise AssetFetchError(f"Manifest request timed out after {self.timeout_s}s") from e

        try:
            urls = parse_backdrop_manifest(json.loads(raw.decode(charset)))
        except (UnicodeDecodeError, LookupError) as e:
            raise AssetFetchError(f"Undecodable manifest body: {e}") from e
        except json.JSONDecodeError as e:
            raise AssetFetchError(f"Invalid manifest JSON: {e}") from e

        logger.info(f"Loaded {len(urls)} backdrops from {self.manifest_url}")
        return urls


# Singleton instance
_client = None


def get_backdrop_client() -> BackdropClient:
    """Get or create backdrop client singleton instance."""
    global _client
    if _client is None:
        _client = BackdropClient()
    return _client
