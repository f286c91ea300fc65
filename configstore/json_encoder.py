import datetime
import json
from typing import Any


class ConfigJSONEncoder(json.JSONEncoder):
    """JSON encoder for configuration snapshots.

    YAML and TOML parse timestamps into date/datetime/time objects, which are
    written as ISO 8601 strings. Sets and tuples become lists. Anything else
    that json cannot handle (for example a function defined by a config
    script) is written as its str() form.
    """

    def default(self, o: Any) -> Any:
        """Converts non-JSON types to JSON-serializable Python types."""
        if isinstance(o, (datetime.date, datetime.time)):
            return o.isoformat()
        if isinstance(o, (set, frozenset, tuple)):
            return list(o)
        return str(o)
