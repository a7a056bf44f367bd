"""Keep the list of datasets a user is editing and the current selection.

The session is host-side state only. The fitting engine never sees it; every
fit is computed from ``Dataset.samples`` passed explicitly.
"""

from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from .models import ModelFamily, Sample

logger = logging.getLogger(__name__)

COLOR_PALETTE = (
    "#4A90E2",
    "#E24A90",
    "#90E24A",
    "#E2904A",
    "#4AE290",
    "#904AE2",
    "#E2E24A",
    "#4A4AE2",
    "#E24A4A",
    "#4AE2E2",
)


@dataclass
class Dataset:
    id: int
    name: str
    color: str
    fit_family: ModelFamily = ModelFamily.AUTO
    visible: bool = True
    samples: List[Sample] = field(default_factory=list)


def _parse_number(value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError("Please enter valid numbers") from None
    if not math.isfinite(number):
        raise ValueError("Please enter valid numbers")
    return number


class DatasetSession:
    """Ordered collection of datasets plus the id of the current one.

    A fresh session holds no datasets; call ``create_dataset`` (or ``clear``)
    to start with an empty "Dataset 1".
    """

    def __init__(self) -> None:
        self.datasets: List[Dataset] = []
        self.current_id: Optional[int] = None
        self._ids: Iterator[int] = itertools.count(1)

    def __iter__(self) -> Iterator[Dataset]:
        return iter(self.datasets)

    def __len__(self) -> int:
        return len(self.datasets)

    def _next_color(self) -> str:
        return COLOR_PALETTE[len(self.datasets) % len(COLOR_PALETTE)]

    def create_dataset(
        self,
        name: Optional[str] = None,
        fit_family: ModelFamily | str = ModelFamily.AUTO,
    ) -> Dataset:
        """Append a new empty dataset and make it current."""
        dataset = Dataset(
            id=next(self._ids),
            name=name if name is not None else f"Dataset {len(self.datasets) + 1}",
            color=self._next_color(),
            fit_family=ModelFamily.parse(fit_family),
        )
        self.datasets.append(dataset)
        self.current_id = dataset.id
        logger.debug("Created dataset %s (id=%d)", dataset.name, dataset.id)
        return dataset

    def get(self, dataset_id: int) -> Optional[Dataset]:
        for dataset in self.datasets:
            if dataset.id == dataset_id:
                return dataset
        return None

    def _require(self, dataset_id: int) -> Dataset:
        dataset = self.get(dataset_id)
        if dataset is None:
            raise KeyError(f"No dataset with id {dataset_id}")
        return dataset

    @property
    def current(self) -> Optional[Dataset]:
        if self.current_id is None:
            return None
        return self.get(self.current_id)

    def select(self, dataset_id: int) -> Dataset:
        dataset = self._require(dataset_id)
        self.current_id = dataset.id
        return dataset

    def rename(self, dataset_id: int, name: str) -> None:
        self._require(dataset_id).name = str(name)

    def set_fit_family(self, dataset_id: int, family: ModelFamily | str) -> None:
        self._require(dataset_id).fit_family = ModelFamily.parse(family)

    def toggle_visibility(self, dataset_id: int) -> bool:
        dataset = self._require(dataset_id)
        dataset.visible = not dataset.visible
        return dataset.visible

    def delete(self, dataset_id: int) -> None:
        """Remove a dataset, keeping a valid current selection.

        If the deleted dataset was current, the first remaining dataset becomes
        current; if none remain, a fresh empty dataset is created.
        """
        dataset = self._require(dataset_id)
        self.datasets.remove(dataset)
        if self.current_id == dataset_id:
            if self.datasets:
                self.current_id = self.datasets[0].id
            else:
                self.current_id = None
                self.create_dataset()

    def clear(self) -> Dataset:
        """Drop every dataset and start over with one empty dataset."""
        self.datasets = []
        self.current_id = None
        return self.create_dataset()

    def add_point(self, x, y, dataset_id: Optional[int] = None) -> Sample:
        """Append a sample to ``dataset_id`` (default: the current dataset).

        Raises:
            ValueError: If ``x`` or ``y`` is not a finite number.
            KeyError: If the target dataset does not exist.
        """
        target_id = self.current_id if dataset_id is None else dataset_id
        if target_id is None:
            raise KeyError("No current dataset to add a point to")
        dataset = self._require(target_id)
        sample = Sample(_parse_number(x), _parse_number(y))
        dataset.samples.append(sample)
        return sample

    def remove_point(self, dataset_id: int, index: int) -> Sample:
        return self._require(dataset_id).samples.pop(index)

    def all_samples(self) -> List[Sample]:
        return [sample for dataset in self.datasets for sample in dataset.samples]
