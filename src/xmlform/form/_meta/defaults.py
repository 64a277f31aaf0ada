# Leading character marking a control key (as opposed to a child slot name)
CONTROL_MARKER = "#"

# Falsy value hides the element and its subtree from synchronization
ACCESS_CONTROL = "#access"

# Control holding the element's ActionBundle
ACTIONS_CONTROL = "#actions"
