from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.catalog.core.services.category_service import CategoryService
from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.core.services.product_service import ProductService
from src.catalog.runtime.config.config_data import ConfigData

if TYPE_CHECKING:
    from loguru import Logger


@dataclass
class ApplicationDependencies:
    config: ConfigData
    log: "Logger"
    category_service: CategoryService
    product_service: ProductService
    database_service: DbSessionService | None = None

    @property
    def backend(self) -> str:
        return "memory" if self.database_service is None else self.database_service.dialect

    def close(self) -> None:
        if self.database_service is not None:
            self.database_service.close()
