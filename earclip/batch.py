"""
Triangulate many entities, each one a list of rings, in parallel.

Each entity is an independent task and owns its rings, so nothing is
shared between workers.  Totals are accumulated in the calling process
from the returned EntityResult objects.  A ring that fails to converge
only loses its own remaining triangles: the failure is recorded on the
entity's result and logged, and the batch carries on.
"""
import logging
import os
import time
from multiprocessing import Pool

from .utils import set_keywords
from .spatial.ring import Ring
from .spatial.orientation import canonicalize
from .spatial import ear_clipping
from .spatial.diagnostics import NonConvergence

log=logging.getLogger(__name__)

# default pool size is this times the cpu count
WORKER_FACTOR=2

class EntityResult(object):
    """
    entity_id: caller's identifier for the entity, or its index
    triangles: list of Triangle, over all rings
    n_points: vertices stored across the rings, after simplification
    n_input_points: points given, before simplification
    elapsed: seconds spent triangulating
    failures: list of (ring index, NonConvergence)
    """
    entity_id=None
    triangles=()
    n_points=0
    n_input_points=0
    elapsed=0.0
    failures=()

    def __init__(self,**kw):
        set_keywords(self,kw)

    @property
    def n_triangles(self):
        return len(self.triangles)

    @property
    def ok(self):
        return len(self.failures)==0

class BatchSummary(object):
    results=()
    wall_time=0.0

    def __init__(self,**kw):
        set_keywords(self,kw)

    @property
    def n_entities(self):
        return len(self.results)
    @property
    def n_points(self):
        return sum(r.n_points for r in self.results)
    @property
    def n_input_points(self):
        return sum(r.n_input_points for r in self.results)
    @property
    def n_triangles(self):
        return sum(r.n_triangles for r in self.results)
    @property
    def elapsed(self):
        """ summed per-entity processing time, seconds """
        return sum(r.elapsed for r in self.results)
    @property
    def n_failed_rings(self):
        return sum(len(r.failures) for r in self.results)

    def report(self):
        return ("Processed \n%d entities\n%d points\n%d triangles\n in %d ms"%
                (self.n_entities,self.n_input_points,self.n_triangles,
                 int(self.elapsed*1000)))

def triangulate_entity(rings,threshold=0.0,leftmost=True,entity_id=None,
                       loop_factor=None):
    """
    Triangulate each ring of an entity independently.

    rings: list of [N,2] sequences
    threshold: simplification threshold passed to Ring.push_back
    leftmost: rotate each ring to start at its leftmost vertex

    Returns EntityResult.  NonConvergence is caught here, and that
    ring contributes the triangles found before giving up.
    """
    t0=time.perf_counter()
    triangles=[]
    failures=[]
    n_points=0
    n_input_points=0

    for ring_i,points in enumerate(rings):
        ring=Ring(threshold=threshold)
        for p in points:
            n_input_points+=1
            ring.push_back(p)
        n_points+=len(ring)
        canonicalize(ring,leftmost=leftmost)
        try:
            triangles.extend(ear_clipping.get_triangles(ring,loop_factor=loop_factor))
        except NonConvergence as exc:
            triangles.extend(exc.triangles)
            failures.append( (ring_i,exc) )

    return EntityResult(entity_id=entity_id,
                        triangles=triangles,
                        n_points=n_points,
                        n_input_points=n_input_points,
                        elapsed=time.perf_counter()-t0,
                        failures=failures)

def _entity_task(args):
    entity_id,rings,kw=args
    return triangulate_entity(rings,entity_id=entity_id,**kw)

def default_workers():
    return WORKER_FACTOR*(os.cpu_count() or 1)

def triangulate_entities(entities,threshold=0.0,leftmost=True,workers=None,
                         loop_factor=None,chunksize=1):
    """
    entities: sequence of entities, each a list of rings, or a dict
      mapping entity id to rings.
    workers: size of the process pool.  Defaults to
      WORKER_FACTOR*cpu count.  1 runs everything in this process.

    Returns BatchSummary with one EntityResult per entity, in input order.
    """
    if threshold<0:
        raise ValueError("Simplification threshold must be non-negative, got %r"%threshold)
    if workers is None:
        workers=default_workers()
    if workers<1:
        raise ValueError("Need at least one worker, got %r"%workers)

    if isinstance(entities,dict):
        items=list(entities.items())
    else:
        items=list(enumerate(entities))

    kw=dict(threshold=threshold,leftmost=leftmost,loop_factor=loop_factor)
    tasks=[ (entity_id,rings,kw) for entity_id,rings in items]

    t0=time.perf_counter()
    workers=min(workers,max(1,len(tasks)))
    if workers==1:
        results=[_entity_task(task) for task in tasks]
    else:
        log.info("Triangulating %d entities on %d workers",len(tasks),workers)
        with Pool(workers) as pool:
            results=list(pool.imap(_entity_task,tasks,chunksize))

    for result in results:
        for ring_i,exc in result.failures:
            # non fatal, just leaves a gap in that entity
            log.warning("Triangulation error, entity %s ring %d: %s",
                        result.entity_id,ring_i,exc.report())

    summary=BatchSummary(results=results,wall_time=time.perf_counter()-t0)
    log.info("%d entities, %d points, %d triangles, %d failed rings in %.1f ms",
             summary.n_entities,summary.n_input_points,summary.n_triangles,
             summary.n_failed_rings,1000*summary.elapsed)
    return summary
