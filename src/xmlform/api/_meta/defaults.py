# Version marker written on the root of generated form definitions
DEFINITION_VERSION = 3

XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

# Placeholder replaced by the submitted value in `xml` create actions
XML_VALUE_PLACEHOLDER = "%value%"
