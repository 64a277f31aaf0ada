DB_DSN = "sqlite://"
XMLFORM_TABLE = "xml_forms"
