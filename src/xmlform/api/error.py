from xmlform.error import XMLFormException, NotFoundError, InternalServerError


class ContextError(XMLFormException):
    ''' Base of the errors raised while resolving the context node of an action '''

    def __init__(self, errcode, context_type, element, message):
        self.context_type = context_type
        self.element = element
        super().__init__(errcode, message, {"context": str(context_type), "element": element.hash})


class ContextNotFoundError(NotFoundError, ContextError):
    ''' The node a context refers to does not exist (yet).

        Some callers treat this as "not present yet", others propagate it.
    '''
    errcode = "X01.404"

    def __init__(self, context_type, element):
        super().__init__(
            self.errcode,
            context_type,
            element,
            f"The node associated with the context [{context_type}] was not found."
        )


class ContextDefinitionError(InternalServerError, ContextError):
    ''' An action asks for a parent context but no ancestor can provide one. '''
    errcode = "X01.500"

    def __init__(self, context_type, element):
        super().__init__(
            self.errcode,
            context_type,
            element,
            f"Specifies a context of [{context_type}] but none is defined. Check the form definition."
        )
