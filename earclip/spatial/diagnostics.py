"""
Failure reporting for ear clipping.

The only failure internal to the algorithm is non-convergence: the loop
bound ran out while live vertices remained.  Rather than a message
string, the exception carries the state so callers can decide to skip,
log, or retry with simplification.
"""
from collections import namedtuple

from ..utils import set_keywords

class RemainingVertex(namedtuple('RemainingVertex','index x y')):
    """ a live vertex left over when triangulation gave up """
    __slots__=()

    def __str__(self):
        return "%d, Deleted: False, X:%r, Y:%r"%(self.index,self.x,self.y)

def describe_remaining(ring):
    return [RemainingVertex(i,v.x,v.y)
            for i,v in enumerate(ring)
            if not v.deleted]

class TriangulationError(Exception):
    def __init__(self,*a,**k):
        super(TriangulationError,self).__init__(*a)
        set_keywords(self,k)

class NonConvergence(TriangulationError):
    """
    Ear search hit its loop bound.

    loop_count: iterations run
    n_original: vertices in the ring, including deleted
    n_remaining: live vertices left
    remaining: list of RemainingVertex
    triangles: triangles emitted before giving up, if the caller
      collected them (see ear_clipping.get_triangles)
    """
    kind='non-convergence'
    loop_count=None
    n_original=None
    n_remaining=None
    remaining=()
    triangles=()

    @classmethod
    def from_ring(cls,ring,loop_count):
        remaining=describe_remaining(ring)
        return cls(loop_count=loop_count,
                   n_original=len(ring),
                   n_remaining=ring.size(),
                   remaining=remaining)

    def to_dict(self):
        return dict(kind=self.kind,
                    loop_count=self.loop_count,
                    n_original=self.n_original,
                    n_remaining=self.n_remaining,
                    remaining=[r._asdict() for r in self.remaining],
                    n_triangles=len(self.triangles))

    def report(self):
        lines=["not deterministic: %d iterations for %d points, %d points remaining"%
               (self.loop_count,self.n_original,self.n_remaining)]
        lines+=[str(r) for r in self.remaining]
        return "\n".join(lines)

    def __str__(self):
        if self.args:
            return super(NonConvergence,self).__str__()
        return self.report()
