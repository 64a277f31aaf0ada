from typing import Dict

from pyrsistent import pmap

from xmlform.error import BadRequestError, NotFoundError

from . import logger


class NodeRegistry(object):
    ''' Identity map from form element hash to document node.

        The registry does not own nodes, the document does. Entries go stale
        when elements leave the tree or nodes leave the document; the
        processor cleans them up after each synchronization.
    '''

    def __init__(self):
        self._nodes: Dict[str, object] = {}

    def __contains__(self, hash):
        return hash in self._nodes

    def __len__(self):
        return len(self._nodes)

    def register(self, hash: str, node):
        if hash in self._nodes:
            if self._nodes[hash] is node or self._nodes[hash] == node:
                return

            raise BadRequestError(
                "X02.301",
                f"Element [{hash}] is already registered to a different node",
                None
            )

        self._nodes[hash] = node
        logger.debug('Registered node [%s => %r]', hash, node)

    def unregister(self, hash: str):
        if self._nodes.pop(hash, None) is not None:
            logger.debug('Unregistered node [%s]', hash)

    def is_registered(self, hash: str) -> bool:
        return hash in self._nodes

    def get(self, hash: str):
        try:
            return self._nodes[hash]
        except KeyError:
            raise NotFoundError("X02.401", f"Element [{hash}] has no registered node") from None

    def get_registered(self):
        return pmap(self._nodes)
