from collections.abc import Mapping
from typing import Any, Dict, Optional

from .element import FormElement


class FormValues(object):
    ''' Submitted values, looked up by element hash '''

    def __init__(self, values: Optional[Dict[str, Any]] = None):
        self._values = dict(values or {})

    def __contains__(self, hash):
        return hash in self._values

    def get_value(self, hash: str, default=None):
        return self._values.get(hash, default)

    def set_value(self, hash: str, value):
        self._values[hash] = value

    @classmethod
    def from_submission(cls, root: FormElement, submitted: Mapping) -> "FormValues":
        ''' Map a nested submission (keyed by child slot names) onto the
            hashes of the elements of `root`.
        '''
        values = cls()
        stack = [(root, submitted)]
        while stack:
            element, data = stack.pop()
            for key, child in element.children.items():
                if key not in data:
                    continue

                value = data[key]
                if len(child) and isinstance(value, Mapping):
                    stack.append((child, value))
                else:
                    values.set_value(child.hash, value)

        return values
