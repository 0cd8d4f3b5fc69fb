"""JSON dataset storage for the Cerberus pipeline.

Datasets are written as camelCase JSON, the shape the dashboard reads,
and loaded back into their pydantic models.
"""

from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel

from .logging import get_context_logger

logger = get_context_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

COUNTRY_DATASET_FILENAME = "corruption-data.json"
ENTITY_DATASET_FILENAME = "entity-data.json"
LEGISLATION_DATASET_FILENAME = "legislation-data.json"
FOCUSPOINT_DATASET_FILENAME = "focuspoint-data.json"


def write_dataset(path: Path | str, model: BaseModel) -> Path:
    """Write a dataset model as JSON.

    Args:
        path: Destination file; parent directories are created
        model: Dataset to serialize

    Returns:
        The written path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(model.model_dump_json(by_alias=True, indent=2), encoding="utf-8")

    logger.info(
        f"Wrote {path}",
        extra={"path": str(path), "bytes": path.stat().st_size},
    )
    return path


def load_dataset(path: Path | str, model_cls: type[ModelT]) -> ModelT:
    """Load a dataset written by write_dataset.

    Args:
        path: JSON file to read
        model_cls: Dataset model class

    Returns:
        The validated dataset

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the JSON does not match the model
    """
    path = Path(path)
    return model_cls.model_validate_json(path.read_text(encoding="utf-8"))
