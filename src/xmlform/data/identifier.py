import uuid


UUID_GENR = uuid.uuid4  # Generate a random identifier
