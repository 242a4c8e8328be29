"""Dump line decoding into typed HugeGraph records."""

from typing import Any

import msgspec

from graphvault.exceptions import DeserializationError
from graphvault.graph.models import RECORD_TYPES, RestoreType


class RecordDecoder:
    """Decodes dump lines into lists of typed records.

    A dump line is a JSON object with a single key, the dump tag, whose value
    is an array of records::

        {"vertex": [{"id": "1:marko", "label": "person", "properties": {}}]}

    Decoding is done in two steps with msgspec: the line is parsed into a
    generic object to locate the tag key, then the array is converted into
    ``list[<record struct>]``, which validates every element's shape.
    """

    def decode(self, restore_type: RestoreType, line: str | bytes) -> list[Any]:
        """Decode one dump line into records of the given type.

        Args:
            restore_type: Type whose tag keys the record array
            line: One line of a dump file

        Returns:
            Records in the order they appear in the line

        Raises:
            DeserializationError: If the line is not a JSON object, the tag key
                is missing, or any element does not match the record shape
        """
        tag = restore_type.tag

        try:
            document = msgspec.json.decode(line)
        except msgspec.DecodeError as e:
            raise DeserializationError(f"Failed to deserialize {tag} line: {e}") from e

        if not isinstance(document, dict):
            raise DeserializationError(
                f"Expected a JSON object for {tag} line, got {type(document).__name__}"
            )
        if tag not in document:
            raise DeserializationError(f"Can't find value of the key: {tag} in json")

        record_type = RECORD_TYPES[restore_type]
        try:
            return msgspec.convert(document[tag], type=list[record_type])
        except msgspec.ValidationError as e:
            raise DeserializationError(
                f"Invalid {tag} record ({record_type.__name__}): {e}"
            ) from e
