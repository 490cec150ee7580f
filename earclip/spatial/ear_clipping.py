"""
Ear clipping triangulation of a single ring.

The ring must be clockwise (see orientation.set_clockwise).  Each pass
looks at the first three live vertices; if they form a convex corner
with no other ring vertex strictly inside, the middle vertex is cut off
as an ear.  Either way the ring is rotated by one and the next triple is
tried.  Rings down to 4 or 3 live vertices are finished directly.

The search is bounded by LOOP_FACTOR*len(ring) passes.  Self-intersecting
input, or unlucky floating point ties, can exhaust that, in which case
NonConvergence is raised after the triangles found so far.
"""
from collections import namedtuple
import logging

import numpy as np

from . import predicates
from .diagnostics import NonConvergence
from .orientation import canonicalize
from .ring import Ring

log=logging.getLogger(__name__)

# Upper bound on outer passes, per stored vertex
LOOP_FACTOR=3

class Triangle(namedtuple('Triangle','p1 p2 p3')):
    """
    Three (x,y) positions, copied when the ear is accepted, so they don't
    change as the ring is consumed.
    """
    __slots__=()

    @classmethod
    def from_vertices(cls,a,b,c):
        return cls(a.xy,b.xy,c.xy)

    @property
    def signed_area(self):
        (x1,y1),(x2,y2),(x3,y3)=self
        return 0.5*((x2-x1)*(y3-y1) - (x3-x1)*(y2-y1))

    @property
    def area(self):
        return abs(self.signed_area)

    def to_array(self):
        return np.array(self,np.float64)

    def to_polygon(self):
        from shapely import geometry
        return geometry.Polygon(self)

def triangles_to_array(triangles):
    """ [N,3,2] array of triangle vertices """
    return np.array(triangles,np.float64).reshape([-1,3,2])

def triangles_to_vertices(triangles):
    """ flat [3N,2] array, three consecutive rows per triangle """
    return triangles_to_array(triangles).reshape([-1,2])

def take_live(ring):
    """
    Delete all live vertices, returning them in ring order.
    """
    taken=[]
    for i,v in enumerate(ring):
        if not v.deleted:
            taken.append(v)
            ring.delete(i)
    return taken

def find_inside(ring,p1,p2,p3):
    """
    Return the first vertex of ring strictly inside triangle p1,p2,p3, or
    None.  Deleted vertices count, since they are still on the boundary of
    the original polygon.  The triangle's own vertices are skipped by
    identity; other vertices with the same coordinates are still tested.
    """
    for p in ring:
        if p is p1 or p is p2 or p is p3:
            continue
        if predicates.point_in_triangle(p1,p2,p3,p):
            return p
    return None

def iter_triangles(ring,loop_factor=None):
    """
    Generate triangles covering the clockwise ring, consuming the ring
    as it goes.  Raises NonConvergence once the loop bound is reached with
    live vertices left, after everything found so far has been yielded.
    """
    if loop_factor is None:
        loop_factor=LOOP_FACTOR
    max_loop=loop_factor*len(ring)
    loop=0

    while ring.size()>0 and loop<max_loop:
        loop+=1
        size=ring.size()

        if size<3:
            # not a polygon.  valid input doesn't get here
            log.debug("iter_triangles: only %d live vertices, dropping",size)
            take_live(ring)
            break

        if size==3:
            a,b,c=take_live(ring)
            if predicates.is_convex(a,b,c):
                yield Triangle.from_vertices(a,b,c)
            else:
                log.debug("iter_triangles: final triangle is degenerate or inverted")
            break

        if size==4:
            p0,p1,p2,p3=take_live(ring)
            if ( predicates.is_reflex(p0,p1,p2) or
                 predicates.is_reflex(p2,p3,p0) ):
                # p0-p2 would leave the ring, only p1-p3 is inside
                if predicates.is_convex(p1,p2,p3):
                    yield Triangle.from_vertices(p1,p2,p3)
                if predicates.is_convex(p3,p0,p1):
                    yield Triangle.from_vertices(p3,p0,p1)
            else:
                # split across p0-p2.  Second half is tested in ring
                # order, emitted as p0,p3,p2
                if predicates.is_convex(p0,p1,p2):
                    yield Triangle.from_vertices(p0,p1,p2)
                if predicates.is_convex(p0,p2,p3):
                    yield Triangle.from_vertices(p0,p3,p2)
            break

        for attempt in range(size-1):
            p1,_=ring.first()
            p2,i2=ring.next()
            p3,_=ring.next()

            if not predicates.is_convex(p1,p2,p3):
                ring.move_to_back()
                continue
            if find_inside(ring,p1,p2,p3) is not None:
                ring.move_to_back()
                continue

            ring.delete(i2)
            ring.move_to_back()
            if not predicates.is_colinear(p1,p2,p3):
                yield Triangle.from_vertices(p1,p2,p3)

            if ring.size()<3:
                # last ear was the whole remainder
                take_live(ring)
                break

    if ring.size()>0:
        exc=NonConvergence.from_ring(ring,loop)
        log.debug("iter_triangles: %s",exc.report())
        raise exc

def get_triangles(ring,loop_factor=None):
    """
    Like iter_triangles, but returns a list.  On NonConvergence the
    partial list is attached to the exception as .triangles.
    """
    triangles=[]
    try:
        for tri in iter_triangles(ring,loop_factor=loop_factor):
            triangles.append(tri)
    except NonConvergence as exc:
        exc.triangles=triangles
        raise
    return triangles

def triangulate(points,threshold=0.0,leftmost=True,loop_factor=None):
    """
    Build a ring from a sequence of (x,y), make it clockwise, optionally
    start it at the leftmost vertex, and return the list of triangles.

    points: [N,2] sequence.  The closing point of a closed ring may be
      included, though it is only dropped when threshold>0.
    threshold: simplification threshold, see Ring.push_back
    """
    ring=Ring.from_points(points,threshold=threshold)
    canonicalize(ring,leftmost=leftmost)
    return get_triangles(ring,loop_factor=loop_factor)
