# Log every package exception (with traceback) at the point it is raised.
DEBUG_APP_EXCEPTION = False
