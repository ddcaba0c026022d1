"""
Domain errors raised by the menu engine and its workflows
"""
from typing import Any, Optional


class MenuHubError(Exception):
    """Base class for all menu engine errors"""

    status_code: int = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidRange(MenuHubError):
    """Start date falls after end date"""

    def __init__(self, start: Any, end: Any):
        super().__init__(f"Start date {start} must not be after end date {end}")
        self.start = start
        self.end = end


class MissingStructure(MenuHubError):
    """A building lacks one or both active weekly structures"""

    def __init__(self, company_id: str, building_id: str, missing: list[str]):
        super().__init__(
            f"Building {building_id} of company {company_id} has no active "
            f"{' or '.join(missing)}"
        )
        self.company_id = company_id
        self.building_id = building_id
        self.missing = missing


class PersistenceFailure(MenuHubError):
    """The document store rejected one or more writes"""

    status_code = 502

    def __init__(
        self,
        message: str,
        failures: Optional[list[tuple[str, Exception]]] = None,
        result: Any = None,
    ):
        super().__init__(message)
        # (building_id or collection/id, underlying error)
        self.failures = failures or []
        # Partial outcome of a fan-out or copy; already persisted documents stay
        self.result = result


class CrossCompanyCopyRejected(MenuHubError):
    """Structure copy targets a building outside the source company"""

    status_code = 422

    def __init__(self, company_id: str, building_ids: list[str]):
        super().__init__(
            f"Buildings {', '.join(building_ids)} do not belong to company {company_id}"
        )
        self.company_id = company_id
        self.building_ids = building_ids


class EntityNotFound(MenuHubError):
    status_code = 404

    def __init__(self, collection: str, entity_id: str):
        super().__init__(f"{collection} {entity_id} not found")
        self.collection = collection
        self.entity_id = entity_id


class DuplicateMenu(MenuHubError):
    status_code = 409

    def __init__(self, start: str, end: str, existing_id: str):
        super().__init__(f"A combined menu for {start} to {end} already exists")
        self.existing_id = existing_id


class EmptyMenu(MenuHubError):
    def __init__(self):
        super().__init__("Please add menu items before saving")
