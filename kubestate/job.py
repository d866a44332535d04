"""Job collector: active, succeeded and failed pod counters."""

from typing import Any, List, Sequence

from .common import attr, bind, count, usable_namespace
from .models import LAYOUTS, Kind, Metric
from .namespace import slugify


JOB = LAYOUTS[Kind.job]

STATUS_FIELDS = ("active", "succeeded", "failed")


class JobCollector:
    """Emits the job's status counters, unset counters reading as 0."""

    kind = Kind.job

    def collect(self, mts: Sequence[Metric], job: Any) -> List[Metric]:
        metrics: List[Metric] = []

        for mt in mts:
            ns = usable_namespace(mt, JOB)
            if ns is None:
                continue

            field = ns[JOB.field + 1]
            if ns[JOB.field] != "status" or field not in STATUS_FIELDS:
                continue

            ns[JOB.namespace] = slugify(attr(job, "metadata", "namespace"))
            ns[JOB.name] = slugify(attr(job, "metadata", "name"))
            metrics.append(bind(mt, ns, count(attr(job, "status", field))))

        return metrics
