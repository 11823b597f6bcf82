"""JSON-file-backed business data provider adapter."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from leadengine.application.dtos.business import (
    BusinessContactDetails,
    FAQEntry,
    ServiceCatalogEntry,
)
from leadengine.application.ports.business_data_provider import BusinessDataProvider
from leadengine.domain.exceptions import ExternalServiceError
from leadengine.infrastructure.logging.logger import logger


class JSONBusinessDataProvider(BusinessDataProvider):
    """
    Business data read from a JSON document keyed by business id.

    The file is re-read whenever its modification time changes, so edits to
    prices or the ``manualOverride`` flag show up without a restart. Unknown
    businesses resolve to empty data.
    """

    def __init__(self, json_path: Optional[str] = None) -> None:
        """
        Initialize JSON business data provider.

        Args:
            json_path: Path to the JSON file. Defaults to data/businesses.json under the project root.
        """
        if json_path is None:
            project_root = Path(__file__).parent.parent.parent.parent.parent
            json_path = str(project_root / "data" / "businesses.json")
        self._json_path = json_path
        self._mtime: Optional[float] = None
        self._businesses: dict[str, dict[str, Any]] = {}

    def _load(self) -> dict[str, dict[str, Any]]:
        try:
            mtime = os.path.getmtime(self._json_path)
            if self._mtime is None or mtime != self._mtime:
                with open(self._json_path, "r", encoding="utf-8") as file:
                    document = json.load(file)
                self._businesses = document.get("businesses", {})
                self._mtime = mtime
        except (OSError, json.JSONDecodeError, AttributeError) as e:
            logger.error(f"Error loading business data from {self._json_path}: {str(e)}")
            raise ExternalServiceError(f"Business data unavailable: {str(e)}") from e
        return self._businesses

    def _business(self, business_id: str) -> dict[str, Any]:
        return self._load().get(business_id) or {}

    async def get_services(self, business_id: str) -> list[ServiceCatalogEntry]:
        """
        Get the service catalog of a business.

        Args:
            business_id: Business identifier

        Returns:
            Catalog entries in file order (invalid entries are skipped)
        """
        services = []
        for raw in self._business(business_id).get("services", []):
            try:
                services.append(ServiceCatalogEntry.model_validate(raw))
            except PydanticValidationError as e:
                logger.warning(f"Skipping invalid service for business {business_id}: {str(e)}")
        return services

    async def get_contact_details(self, business_id: str) -> BusinessContactDetails:
        """
        Get the public contact details of a business.

        Args:
            business_id: Business identifier

        Returns:
            Contact details (empty when unknown)
        """
        try:
            return BusinessContactDetails.model_validate(
                self._business(business_id).get("contact") or {}
            )
        except PydanticValidationError as e:
            raise ExternalServiceError(f"Invalid contact details for {business_id}") from e

    async def get_faqs(self, business_id: str) -> list[FAQEntry]:
        """
        Get the FAQs of a business.

        Args:
            business_id: Business identifier

        Returns:
            FAQ entries (invalid entries are skipped)
        """
        faqs = []
        for raw in self._business(business_id).get("faqs", []):
            try:
                faqs.append(FAQEntry.model_validate(raw))
            except PydanticValidationError:
                continue
        return faqs

    async def get_business_name(self, business_id: str) -> str:
        """
        Get the display name of a business.

        Args:
            business_id: Business identifier

        Returns:
            Display name, or an empty string when unknown
        """
        return str(self._business(business_id).get("name") or "")
