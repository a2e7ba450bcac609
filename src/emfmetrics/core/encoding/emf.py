"""JSON encoder for Embedded Metric Format documents."""

import json
from collections.abc import Mapping
from typing import Any

from emfmetrics.core.errors import EncodingError
from emfmetrics.core.models import (
    Metadata,
    MetricDefinition,
    MetricDirective,
    StorageResolution,
)

METADATA_KEY = "_aws"


def _encode_definition(definition: MetricDefinition) -> dict[str, Any]:
    obj: dict[str, Any] = {"Name": definition.name}
    if definition.unit:
        obj["Unit"] = str(definition.unit)
    # Standard resolution is implied when the field is absent
    if definition.resolution and definition.resolution != StorageResolution.STANDARD:
        obj["StorageResolution"] = int(definition.resolution)
    return obj


def _encode_directive(directive: MetricDirective) -> dict[str, Any]:
    return {
        "Namespace": directive.namespace,
        "Dimensions": [list(dimension) for dimension in directive.dimensions],
        "Metrics": [_encode_definition(m) for m in directive.metrics],
    }


def encode_metadata(metadata: Metadata) -> dict[str, Any]:
    """Encode metadata to the JSON-ready ``_aws`` object.

    Args:
        metadata: The metadata to encode.

    Returns:
        Dict with ``CloudWatchMetrics`` and, when set, ``Timestamp``
        and ``LogGroupName``. List order follows insertion order.
    """
    obj: dict[str, Any] = {}
    if metadata.timestamp is not None:
        obj["Timestamp"] = metadata.timestamp
    obj["CloudWatchMetrics"] = [_encode_directive(d) for d in metadata.metrics]
    if metadata.log_group_name:
        obj["LogGroupName"] = metadata.log_group_name
    return obj


def encode_document(values: Mapping[str, Any], indent: bool = False) -> str:
    """Encode the root value map to a single JSON document.

    Metadata values found in the map are encoded with encode_metadata.
    Keys keep insertion order, so repeated flushes of the same state
    produce the same text.

    Args:
        values: Flat fields, optionally including ``_aws`` metadata.
        indent: Indent nested values by two spaces.

    Returns:
        The JSON document followed by a single newline.

    Raises:
        EncodingError: If a value cannot be serialised.
    """

    def default(obj: object) -> Any:
        if isinstance(obj, Metadata):
            return encode_metadata(obj)
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")

    layout: dict[str, Any] = (
        {"indent": 2} if indent else {"separators": (",", ":")}
    )
    try:
        document = json.dumps(
            values,
            allow_nan=False,
            default=default,
            **layout,
        )
    except (TypeError, ValueError) as e:
        raise EncodingError(f"could not encode metrics to JSON: {e}") from e
    return document + "\n"
