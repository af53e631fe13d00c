"""yamldb: a simple disk-backed key-value store for YAML files."""

__version__ = "0.1.0"

from yamldb.config import Compression, DiskOptions, Permissions
from yamldb.database import YamlDb
from yamldb.errors import (
    DecodeError,
    DeleteRestrictedError,
    NotFoundError,
    ReferenceNotFoundError,
    StorageIOError,
    UpdateRestrictedError,
    YamlDbError,
)
from yamldb.schema import Action, Constraints, Schema, SchemaReference
from yamldb.sorting import OrderFunc, order_alphabetically, order_alphabetically_reversed
from yamldb.transform import EXTENSION

__all__ = [
    "__version__",
    "YamlDb",
    "DiskOptions",
    "Permissions",
    "Compression",
    "EXTENSION",
    "OrderFunc",
    "order_alphabetically",
    "order_alphabetically_reversed",
    "Schema",
    "SchemaReference",
    "Constraints",
    "Action",
    "YamlDbError",
    "NotFoundError",
    "ReferenceNotFoundError",
    "StorageIOError",
    "DecodeError",
    "DeleteRestrictedError",
    "UpdateRestrictedError",
]
