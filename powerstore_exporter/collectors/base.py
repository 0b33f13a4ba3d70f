# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Shared building blocks for PowerStore collectors.

Collectors follow the prometheus_client custom collector protocol: describe()
and collect() yield GaugeMetricFamily objects. Every family carries a constant
``IP`` label holding the array address.
"""

import logging
import time
from collections import namedtuple
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

from prometheus_client.core import GaugeMetricFamily

from powerstore_exporter.errors import RequestError
from powerstore_exporter.stats import COLLECTOR_ERRORS

IP_LABEL = "IP"

# Errors that only cost the samples of one resource
RECOVERABLE_ERRORS = (RequestError, ValueError, TypeError, KeyError)

# One gauge sample: descriptor key, value, label values (without IP)
Sample = namedtuple("Sample", ["key", "value", "labels"])


class MetricDescriptor:
    """Name, help text and variable label names of one gauge family."""

    def __init__(self, name: str, documentation: str, labels: Sequence[str]):
        self.name = name
        self.documentation = documentation
        self.labels = list(labels)

    def family(self) -> GaugeMetricFamily:
        return GaugeMetricFamily(self.name, self.documentation, labels=self.labels + [IP_LABEL])


class MetricTable:
    """
    Declarative source of descriptors for a set of fields.

    Args:
        prefix: Metric name prefix, the field name is appended
        fields: Field names read from each record
        labels: Variable label names, in order
        help_texts: Field -> help text
        fallback: Help text for fields missing from help_texts; the field
            name itself when not given
    """

    def __init__(self, prefix: str, fields: Sequence[str], labels: Sequence[str],
                 help_texts: Optional[Mapping[str, str]] = None,
                 fallback: Optional[Callable[[str], str]] = None):
        self.prefix = prefix
        self.fields = list(fields)
        self.labels = list(labels)
        self.help_texts = dict(help_texts or {})
        self.fallback = fallback or (lambda field: field)

    def help_for(self, field: str) -> str:
        if field in self.help_texts:
            return self.help_texts[field]
        return self.fallback(field)

    def descriptors(self) -> Dict[str, MetricDescriptor]:
        return {
            field: MetricDescriptor(self.prefix + field, self.help_for(field), self.labels)
            for field in self.fields
        }


class StatusMap:
    """Maps a status string to a gauge value; unknown strings map to ``other``."""

    def __init__(self, values: Mapping[str, int], other: int = 0):
        self.values = dict(values)
        self.other = other

    def value(self, raw: Any) -> float:
        if isinstance(raw, bool):
            raw = "true" if raw else "false"
        return float(self.values.get(str(raw), self.other))


def field_value(record: Any, field: str) -> Optional[float]:
    """
    Return a numeric field as float, or None when it is absent, null or not a number.
    """
    if not isinstance(record, Mapping):
        return None
    value = record.get(field)
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def status_value(record: Any, field: str, status_map: StatusMap) -> Optional[float]:
    """Map a status field through status_map; None when the field is absent or null."""
    if not isinstance(record, Mapping) or record.get(field) is None:
        return None
    return status_map.value(record[field])


def parse_speed(value: Any) -> Optional[float]:
    """
    Parse a port speed such as ``25_Gbps`` into 25.0.

    A null speed is reported as 0. A value without an integer prefix gives None.
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    prefix = str(value).split("_", 1)[0]
    try:
        return float(int(prefix))
    except ValueError:
        return None


def records(payload: Any) -> List[Mapping]:
    """
    Return a list response as its object elements.

    Raises:
        ValueError: If the response is not a list
    """
    if not isinstance(payload, list):
        raise ValueError(f"expected a list, got {type(payload).__name__}")
    return [item for item in payload if isinstance(item, Mapping)]


def last_bucket(series: Any) -> Optional[Mapping]:
    """
    Return the newest bucket of a metrics/generate response.

    Returns:
        The last element, or None when the series is empty

    Raises:
        ValueError: If the response is not a list of objects
    """
    if not isinstance(series, list):
        raise ValueError(f"expected a list of buckets, got {type(series).__name__}")
    if not series:
        return None
    bucket = series[-1]
    if not isinstance(bucket, Mapping):
        raise ValueError(f"expected a bucket object, got {type(bucket).__name__}")
    return bucket


def label(value: Any) -> str:
    return "" if value is None else str(value)


class BaseCollector:
    """
    Common collect/describe logic.

    Subclasses build their descriptors in ``build_descriptors`` and produce
    samples from ``gather``. A failure part way through a pass is logged and
    the samples gathered so far are still exposed.
    """

    name = "base"

    def __init__(self, client, cache, workers: int = 16):
        self.client = client
        self.cache = cache
        self.workers = workers
        self.logger = logging.getLogger(__name__)
        self.metrics = self.build_descriptors()

    @property
    def ip(self) -> str:
        return self.client.ip

    def build_descriptors(self) -> Dict[str, MetricDescriptor]:
        raise NotImplementedError

    def gather(self) -> Iterable[Sample]:
        raise NotImplementedError

    def describe(self):
        for descriptor in self.metrics.values():
            yield descriptor.family()

    def collect(self):
        start = time.time()
        samples: List[Sample] = []
        try:
            for sample in self.gather():
                samples.append(sample)
        except Exception as e:
            COLLECTOR_ERRORS.labels(ip=self.ip, collector=self.name).inc()
            self.logger.error(f"{self.name} collection for {self.ip} failed: {e}")

        families: Dict[str, GaugeMetricFamily] = {}
        for key, value, labels in samples:
            if key not in families:
                families[key] = self.metrics[key].family()
            families[key].add_metric(list(labels) + [self.ip], value)

        self.logger.debug(f"{self.name} collected {len(samples)} samples from {self.ip} "
                          f"in {time.time() - start:.2f}s")
        yield from families.values()

    def table_samples(self, record: Mapping, fields: Iterable[str], labels: Sequence[str]) -> List[Sample]:
        """Samples for every numeric field present in record."""
        samples = []
        for field in fields:
            value = field_value(record, field)
            if value is not None:
                samples.append(Sample(field, value, tuple(labels)))
        return samples

    def fan_out(self, ids: Sequence[str], task: Callable[[str], List[Sample]]) -> Iterator[Sample]:
        """
        Run task once per id on a bounded worker pool and yield all samples.

        Recoverable per-id errors are logged and skipped. Any other error is
        raised once every task has finished and its siblings' samples have
        been yielded.
        """
        results: List[Sample] = []
        first_error: Optional[BaseException] = None
        if ids:
            with ThreadPoolExecutor(max_workers=min(self.workers, len(ids))) as executor:
                futures = {executor.submit(task, resource_id): resource_id for resource_id in ids}
                for future in as_completed(futures):
                    resource_id = futures[future]
                    try:
                        results.extend(future.result())
                    except RECOVERABLE_ERRORS as e:
                        COLLECTOR_ERRORS.labels(ip=self.ip, collector=self.name).inc()
                        self.logger.warning(f"{self.name}: skipping {resource_id} on {self.ip}: {e}")
                    except Exception as e:
                        if first_error is None:
                            first_error = e
        yield from results
        if first_error is not None:
            raise first_error


class PerformanceCollector(BaseCollector):
    """
    Fan-out over cached ids of one resource type, one report per id.

    Subclasses set ``resource_type`` and ``table`` and implement ``fetch``.
    ``label_sets`` yields one tuple of label values per sample set; the
    default is (display name, appliance id from the bucket).
    """

    resource_type = ""
    table: MetricTable = None

    def build_descriptors(self) -> Dict[str, MetricDescriptor]:
        return self.table.descriptors()

    def fetch(self, resource_id: str) -> Any:
        raise NotImplementedError

    def label_sets(self, resource_id: str, name: str, bucket: Mapping) -> List[tuple]:
        return [(name, label(bucket.get("appliance_id")))]

    def gather(self) -> Iterable[Sample]:
        yield from self.fan_out(self.cache.ids(self.resource_type), self.collect_one)

    def collect_one(self, resource_id: str) -> List[Sample]:
        bucket = last_bucket(self.fetch(resource_id))
        if bucket is None:
            self.logger.debug(f"{self.name}: no data yet for {resource_id} on {self.ip}")
            return []
        name = self.cache.lookup(self.resource_type, resource_id) or ""
        samples = []
        for labels in self.label_sets(resource_id, name, bucket):
            samples.extend(self.table_samples(bucket, self.table.fields, labels))
        return samples
