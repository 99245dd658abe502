"""Normalization of external image-classifier output onto usage categories."""

from __future__ import annotations

import asyncio
import inspect
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from functools import partial
from typing import Any, Callable, Mapping, Protocol, Sequence

from prospect_engine.catalog import MarketData, default_market_data
from prospect_engine.config import ClassifierConfig
from prospect_engine.exceptions import ClassificationUnavailableError, ValidationError
from prospect_engine.models import IdentifiedCategory, Prediction, UsageCategory

logger = logging.getLogger(__name__)

# Labels emitted by the property image model
LABEL_CATEGORIES: dict[str, UsageCategory] = {
    "building": UsageCategory.RESIDENTIAL,
    "room": UsageCategory.RESIDENTIAL,
    "office space": UsageCategory.COMMERCIAL,
    "land": UsageCategory.AGRICULTURAL,
    "material": UsageCategory.INDUSTRIAL,
}


class ImageClassifier(Protocol):
    """External classifier collaborator.

    ``classify`` returns predictions ordered by confidence, highest
    first. It may be a plain method or a coroutine function.
    """

    def classify(self, image: Any) -> Sequence[Prediction | Mapping[str, Any]]: ...


class CategoryClassifierAdapter:
    """Map classifier labels onto the engine's usage categories.

    Only the top prediction is consumed. The reject label ("human")
    short-circuits prospect generation; unmapped labels default to
    residential whatever their confidence. Confidence never gates the
    category, it only produces a warning when low.
    """

    def __init__(
        self,
        config: ClassifierConfig | None = None,
        label_categories: Mapping[str, UsageCategory] | None = None,
    ) -> None:
        self.config = config or ClassifierConfig()
        self.label_categories = dict(label_categories or LABEL_CATEGORIES)

    def identify(self, predictions: Sequence[Prediction | Mapping[str, Any]]) -> IdentifiedCategory:
        """Normalize a classifier's ordered predictions.

        Parameters
        ----------
        predictions : Sequence[Prediction | Mapping[str, Any]]
            Predictions, highest confidence first. Mappings may use
            ``label``/``confidence`` or ``className``/``probability`` keys.

        Returns
        -------
        IdentifiedCategory
            Category for the top prediction, or the fallback when empty.

        Raises
        ------
        ClassificationUnavailableError
            If the classifier output is not a sequence of predictions.
        """
        try:
            predictions = list(predictions or ())
        except TypeError as exc:
            raise ClassificationUnavailableError(f"malformed classifier output: {predictions!r}") from exc

        if not predictions:
            logger.warning("Classifier returned no predictions; using %s", self.config.default_label)
            return self.fallback()

        top = _coerce_prediction(predictions[0])
        return self.from_label(top.label, top.confidence)

    def from_label(self, label: str, confidence: float = 1.0) -> IdentifiedCategory:
        """Build an identified category from a single label."""
        normalized = label.strip().lower()
        confidence = min(max(float(confidence), 0.0), 1.0)

        if normalized == self.config.reject_label:
            logger.info("Image classified as '%s'; no prospects will be generated", normalized)
            return IdentifiedCategory(label=normalized, confidence=confidence, category=None, rejected=True)

        category = self.label_categories.get(normalized, UsageCategory.RESIDENTIAL)
        return IdentifiedCategory(label=normalized, confidence=confidence, category=category)

    def from_category(self, category: UsageCategory | str) -> IdentifiedCategory:
        """Identify a manually chosen category.

        Category values ("commercial") map directly with full confidence;
        any other string is treated as a classifier label, so "human"
        still rejects and unknown labels default to residential.

        Raises
        ------
        ValidationError
            If the category is the reserved generic tag.
        """
        if isinstance(category, str) and not isinstance(category, UsageCategory):
            try:
                category = UsageCategory(category.strip().lower())
            except ValueError:
                return self.from_label(category, 1.0)

        if category == UsageCategory.GENERIC:
            raise ValidationError("'generic' is reserved for padding templates")
        return IdentifiedCategory(label=category.value, confidence=1.0, category=category)

    def fallback(self) -> IdentifiedCategory:
        """Default category used when classification is unavailable."""
        identified = self.from_label(self.config.default_label, self.config.default_confidence)
        return IdentifiedCategory(
            label=identified.label,
            confidence=identified.confidence,
            category=identified.category,
            fallback=True,
        )

    def warnings_for(self, identified: IdentifiedCategory) -> list[str]:
        """Annotations for a low-confidence identification."""
        if identified.fallback or identified.rejected:
            return []
        if identified.confidence < self.config.min_confidence:
            return [
                f"Low classifier confidence ({identified.confidence:.2f}) for '{identified.label}'; "
                f"category {identified.category.value} may be inaccurate"
            ]
        return []

    def classify_image(self, classifier: ImageClassifier, image: Any) -> tuple[IdentifiedCategory, list[str]]:
        """Classify an image with a timeout, degrading to the fallback.

        Never raises for classifier failures: timeouts and errors become
        the fallback category plus a warning.

        Returns
        -------
        tuple[IdentifiedCategory, list[str]]
            Identified category and warnings to attach to the result.
        """
        try:
            if inspect.iscoroutinefunction(classifier.classify):
                # Own loop on the worker thread; the caller may already be inside one
                predictions = self._call_with_timeout(partial(self._run_coroutine, classifier), image)
            else:
                predictions = self._call_with_timeout(classifier.classify, image)
            return self._identified_with_warnings(predictions)
        except ClassificationUnavailableError as exc:
            return self._degrade(exc)

    async def aclassify_image(
        self,
        classifier: ImageClassifier,
        image: Any,
    ) -> tuple[IdentifiedCategory, list[str]]:
        """Async form of :meth:`classify_image`."""
        try:
            predictions = await self._call_async(classifier, image)
            return self._identified_with_warnings(predictions)
        except ClassificationUnavailableError as exc:
            return self._degrade(exc)

    def _identified_with_warnings(
        self,
        predictions: Sequence[Prediction | Mapping[str, Any]],
    ) -> tuple[IdentifiedCategory, list[str]]:
        identified = self.identify(predictions)
        warnings = self.warnings_for(identified)
        if identified.fallback:
            warnings.append("Classifier returned no predictions; using default category")
        return identified, warnings

    def _degrade(self, exc: ClassificationUnavailableError) -> tuple[IdentifiedCategory, list[str]]:
        logger.warning("Image classification unavailable: %s", exc)
        return self.fallback(), [f"Image classification unavailable ({exc}); using default category"]

    def _call_with_timeout(self, classify: Callable[[Any], Sequence[Any]], image: Any) -> Sequence[Any]:
        timeout = self.config.timeout_seconds
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="classifier")
        try:
            future = executor.submit(classify, image)
            return future.result(timeout=timeout)
        except FutureTimeoutError as exc:
            raise ClassificationUnavailableError(f"timed out after {timeout:g}s") from exc
        except ClassificationUnavailableError:
            raise
        except Exception as exc:
            raise ClassificationUnavailableError(str(exc) or type(exc).__name__) from exc
        finally:
            # A hung classifier must not block the caller past the timeout
            executor.shutdown(wait=False, cancel_futures=True)

    def _run_coroutine(self, classifier: ImageClassifier, image: Any) -> Sequence[Any]:
        return asyncio.run(self._call_async(classifier, image))

    async def _call_async(self, classifier: ImageClassifier, image: Any) -> Sequence[Any]:
        timeout = self.config.timeout_seconds
        if inspect.iscoroutinefunction(classifier.classify):
            call = classifier.classify(image)
        else:
            call = asyncio.to_thread(classifier.classify, image)
        try:
            return await asyncio.wait_for(call, timeout=timeout)
        except asyncio.TimeoutError as exc:
            raise ClassificationUnavailableError(f"timed out after {timeout:g}s") from exc
        except Exception as exc:
            raise ClassificationUnavailableError(str(exc) or type(exc).__name__) from exc


def category_for_usage(usage: str, market: MarketData | None = None) -> UsageCategory:
    """Map a free-text usage label such as "Commercial - Retail" onto a category."""
    return (market or default_market_data()).category_for_usage(usage)


def _coerce_prediction(raw: Prediction | Mapping[str, Any]) -> Prediction:
    if isinstance(raw, Prediction):
        return raw
    if not isinstance(raw, Mapping):
        raise ClassificationUnavailableError(f"malformed prediction: {raw!r}")

    label = raw.get("label", raw.get("className"))
    if label is None:
        raise ClassificationUnavailableError(f"prediction without a label: {raw!r}")
    try:
        confidence = float(raw.get("confidence", raw.get("probability", 0.0)))
    except (TypeError, ValueError) as exc:
        raise ClassificationUnavailableError(f"non-numeric confidence in {raw!r}") from exc
    if math.isnan(confidence):
        raise ClassificationUnavailableError(f"non-numeric confidence in {raw!r}")
    return Prediction(label=str(label), confidence=confidence)
