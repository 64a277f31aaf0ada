import re

RX_CAMEL_WORD = re.compile(r'(?<!^)(?=[A-Z])')
RX_NATURAL_CHUNK = re.compile(r'(\d+)')


def camel_to_lower(name, sep='-'):
    return RX_CAMEL_WORD.sub(sep, name).lower()


def natural_key(value):
    ''' Sort key comparing embedded numbers by value and text case-insensitively,
        e.g. "Form 2" < "form 10".
    '''
    return tuple(
        (0, int(chunk), '') if chunk.isdigit() else (1, 0, chunk.lower())
        for chunk in RX_NATURAL_CHUNK.split(value) if chunk
    )


def is_empty(value):
    if value is None:
        return True

    if isinstance(value, str):
        return value.strip() == ''

    if isinstance(value, (list, tuple, dict, set)):
        return len(value) == 0

    return False
