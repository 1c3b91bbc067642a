"""Column and pagination configuration for the automation table."""

from dataclasses import dataclass

from automation_browser.domain.models import AutomationField


@dataclass(frozen=True)
class ColumnConfig:
    field: AutomationField
    label: str
    width: str
    filter_width: str
    sortable: bool = True
    filterable: bool = True

    @property
    def key(self) -> str:
        return self.field.value


AUTOMATION_COLUMNS: tuple[ColumnConfig, ...] = (
    ColumnConfig(AutomationField.ID, "ID", "80px", "0px", filterable=False),
    ColumnConfig(AutomationField.NAME, "Name", "200px", "180px"),
    ColumnConfig(AutomationField.STATUS, "Status", "120px", "100px"),
    ColumnConfig(AutomationField.CREATION_TIME, "Creation Time", "150px", "130px"),
    ColumnConfig(AutomationField.TYPE, "Type", "120px", "100px"),
)

DEFAULT_PAGE_SIZE = 50
PAGE_SIZE_OPTIONS: tuple[int, ...] = (5, 10, 25, 50, 100)
