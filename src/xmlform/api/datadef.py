from typing import Dict, Optional

from xmlform.data import DataModel


class FormProperties(DataModel):
    """ Properties of the document a form produces """
    root_name: Optional[str] = None
    schema_uri: Optional[str] = None
    default_uri: Optional[str] = None
    namespaces: Dict[str, str] = {}
