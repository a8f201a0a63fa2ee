"""Execution planning for tanglewalk.

The WalkPlan validates a WalkConfig, resolves the adapter, path set and
projection it names, and assembles the traverser that actually walks.
"""

from typing import Any, Dict, Iterator, Optional

from .config import WalkConfig, parse_order
from .core.adapter import TreeAdapter, resolve_adapter
from .core.errors import ConfigurationError
from .core.pathset import resolve_pathset
from .core.shoot import ShootProjection
from .core.traverser import MultiRoot, TreeTraverser, create_traverser


class WalkPlan:
    """Validated plan for one kind of walk.

    A plan is reusable: every ``execute`` call starts from fresh frontier
    and path-set state, so the same plan may walk the same structure any
    number of times, including concurrently from separate iterators.
    """

    def __init__(self, config: WalkConfig, adapter: Optional[TreeAdapter] = None):
        """Create and validate a walk plan.

        Args:
            config: What walk to perform
            adapter: TreeAdapter for the structure; ``config.children``
                overrides its expansion when given

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.config = config

        config_errors = config.validate()
        if config_errors:
            raise ConfigurationError(
                f"Invalid configuration: {'; '.join(config_errors)}"
            )

        self.order = parse_order(config.order)
        self.adapter = resolve_adapter(adapter, config.children)
        self.pathset = resolve_pathset(config.pathset)
        self.projection = ShootProjection(config.eltype)
        self.traverser = self._select_traverser()

    def _select_traverser(self) -> TreeTraverser:
        return create_traverser(
            self.order.value,
            self.adapter,
            connector=self.config.connector,
            pathset=self.pathset,
            eltype=self.projection,
        )

    def execute(self, *roots: Any, stacklevel: int = 1) -> Iterator[Any]:
        """Walk one or more roots.

        Several roots are walked as the children of a transient parent that
        never appears in the output. Roots are then at level 0 and their
        traces start with their 1-based position in ``roots``.

        Args:
            *roots: Root node(s) to walk from
            stacklevel: Which caller warnings point at (1 is the caller of
                ``execute``)

        Returns:
            Iterator of projected shoots (lazy except for bottomup)

        Raises:
            ConfigurationError: If no root is given
        """
        if not roots:
            raise ConfigurationError("at least one root is required")
        if len(roots) == 1:
            return self.traverser.traverse(roots[0], stacklevel=stacklevel + 1)
        return self.traverser.traverse(MultiRoot(roots), level=-1, omit_root=True,
                                       stacklevel=stacklevel + 1)

    def get_summary(self) -> Dict[str, Any]:
        """Describe the plan.

        Useful for debugging and logging.
        """
        return {
            'order': self.order.value,
            'lazy': self.traverser.lazy,
            'adapter': repr(self.adapter),
            'pathset': self.pathset.__name__,
            'eltype': tuple(kind.value for kind in self.projection.kinds)
            if not self.projection.single else self.projection.kinds[0].value,
            'custom_connector': self.config.connector is not WalkConfig.connector,
        }
