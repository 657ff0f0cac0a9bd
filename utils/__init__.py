from utils.params import (  # noqa: F401
    optional_int,
    optional_string,
    optional_string_array,
    owner_ref,
    require_int,
    require_string,
)
from utils.paths import FIELDS, ITEMS, locate  # noqa: F401
from utils.query import DEFAULT_PER_PAGE, FieldSelection, Filter, Pagination, compose  # noqa: F401
