''' Last resort values for the settings every module config carries. '''

LOG_LEVEL = "info"
LOG_FORMATTER = (
    "[%(asctime)-8s] "
    "%(process)3d "
    "[%(name)16.16s - %(filename)16.16s:%(lineno)-4d]%(levelname)6s "
    "%(message)s"
)
LOG_DATEFMT = "%H:%M:%S"

# stderr, stdout, file://<path>, or a list of them. None adds no handler.
LOG_OUTPUT = None
LOG_COLORED = False
