"""Selection of prospect templates from the catalog."""

from __future__ import annotations

import logging
import random
from dataclasses import replace

from prospect_engine.catalog import ProspectCatalog, default_catalog
from prospect_engine.exceptions import ValidationError
from prospect_engine.generators.base import BaseGenerator
from prospect_engine.models import PropertyAttributes, ProspectTemplate, UsageCategory

logger = logging.getLogger(__name__)


class ProspectSelector(BaseGenerator):
    """Choose exactly ``count`` templates for a property.

    In category mode the catalog is filtered to one category and to the
    templates whose size predicates accept the property; in
    cross-category mode every template is eligible. Either way a uniform
    sample without replacement is taken and generic filler templates pad
    the result up to ``count``.
    """

    DEFAULT_COUNT = 5

    def __init__(
        self,
        catalog: ProspectCatalog | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(seed=seed, rng=rng)
        self.catalog = catalog or default_catalog()

    def select(
        self,
        category: UsageCategory | None,
        attributes: PropertyAttributes | None = None,
        count: int = DEFAULT_COUNT,
    ) -> list[ProspectTemplate]:
        """Select templates for a category, or across all categories.

        Parameters
        ----------
        category : UsageCategory | None
            Target category. ``None`` selects across all categories.
        attributes : PropertyAttributes | None
            Property used for eligibility predicates. Without it, size
            predicates are not applied.
        count : int
            Number of templates to return.

        Returns
        -------
        list[ProspectTemplate]
            Exactly ``count`` templates.
        """
        if count < 1:
            raise ValidationError(f"count must be positive, got {count}")

        if category is None:
            pool = list(self.catalog.all_templates())
        else:
            pool = [
                t
                for t in self.catalog.templates_for(category)
                if attributes is None or t.is_eligible(attributes.size_sqm)
            ]

        selected = self.rng.sample(pool, k=min(count, len(pool)))

        if len(selected) < count:
            logger.info(
                "Only %d eligible templates for %s; padding with %d generic",
                len(selected),
                category.value if category else "all categories",
                count - len(selected),
            )
            selected.extend(self._padding(len(selected), count))

        return selected

    def _padding(self, start: int, count: int) -> list[ProspectTemplate]:
        """Generic filler templates numbered by their output position."""
        base = self.catalog.generic_template
        return [
            replace(base, id=f"generic-{n}", title=f"{base.title} {n}")
            for n in range(start + 1, count + 1)
        ]
