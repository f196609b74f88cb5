"""Repository for the ImportProduct ledger."""

from catalogue.domain import catalogue
from catalogue.imports.import_product import ImportProduct


@catalogue.repository(part_of=ImportProduct)
class ImportProductRepository:
    def list_all(self) -> list[ImportProduct]:
        """Every import record, newest first."""
        return self._dao.query.order_by("-created_at").all().items
