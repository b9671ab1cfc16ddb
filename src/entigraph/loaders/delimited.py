"""
Delimited file loader.

A raw file has no schema of its own: columns are configured by number and
every header shown to the user comes from the column-to-name mapping.
"""

from typing import List

from ..core.errors import SetupError
from ..sources.base import Row
from .base import DataSourceLoader, Projection


class DelimitedLoader(DataSourceLoader):
    """Loader for CSV-style row sources."""

    seeds_from_first_row = True

    @property
    def name(self) -> str:
        return "csv"

    def validate_spec(self) -> None:
        spec = self.spec
        if (
            spec.center_column_number is None
            or spec.center_column_number < 0
            or not spec.information_column_numbers
            or not spec.column_names
        ):
            raise SetupError(
                "You must provide a valid center node column number, information node column "
                "numbers, and column names to load a delimited file."
            )

        center_name = spec.header_for(spec.center_column_number)
        if center_name is None:
            raise SetupError(
                f"The column number '{spec.center_column_number + 1}' does not exist in the column names."
            )
        if spec.center_column and spec.center_column != center_name:
            raise SetupError(
                f"The column number '{spec.center_column_number + 1}' is named '{center_name}', "
                f"not '{spec.center_column}'. Please provide the column number that matches "
                f"'{spec.center_column}'."
            )

        unknown = [n + 1 for n in spec.information_column_numbers if spec.header_for(n) is None]
        if unknown:
            raise SetupError(f"Information column numbers {unknown} have no column name.")

    def center_projection(self) -> Projection:
        number = self.spec.center_column_number
        return (number, self.spec.header_for(number))

    def information_projections(self) -> List[Projection]:
        return [(number, self.spec.header_for(number)) for number in self.spec.information_column_numbers]

    def filter_key(self, header: str) -> int:
        number = self.spec.column_for(header)
        if number is None:
            raise SetupError(f"The column '{header}' is not in the column names.")
        return number

    def read(self, row: Row, key: int) -> str | None:
        return row.get_by_position(key)
