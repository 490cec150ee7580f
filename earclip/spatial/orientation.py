"""
Canonical winding and starting vertex for a Ring.

Ear clipping in ear_clipping.py only works on clockwise rings, since
predicates.is_convex() assumes clockwise order.  The sign convention
here has to agree with that predicate.
"""
import logging

from ..utils import circular_pairs

log=logging.getLogger(__name__)

def winding_sum(ring):
    """
    sum over edges of (x1-x0)*(y1+y0), closing the ring from the last
    vertex back to the first.  Twice the negated shoelace area.
    """
    vertices=list(ring)
    return sum( (b.x-a.x)*(b.y+a.y)
                for a,b in circular_pairs(vertices) )

def is_clockwise(ring):
    """
    True when the winding sum is positive.  Degenerate rings (zero
    area) are not clockwise.
    """
    if len(ring)==0:
        return False
    return winding_sum(ring) > 0

def set_clockwise(ring):
    """
    Reverse the ring in place if it is not already clockwise.
    Returns True if the ring was reversed.
    """
    if is_clockwise(ring):
        return False
    ring.set_order(reversed(ring.vertices))
    return True

def set_to_leftmost(ring):
    """
    Rotate the ring so the vertex with the smallest x (first one on ties)
    is at index 0, keeping the relative order.  The ear search depends on
    the starting vertex, and starting leftmost avoids some of the inputs
    which otherwise fail to converge.

    Returns the index the leftmost vertex had before rotation.
    """
    vertices=ring.vertices
    if not vertices:
        return None
    min_pos=0
    for i,v in enumerate(vertices):
        if v.x < vertices[min_pos].x:
            min_pos=i
    ring.set_order(vertices[min_pos:] + vertices[:min_pos])
    return min_pos

def canonicalize(ring,leftmost=True):
    reversed_=set_clockwise(ring)
    if leftmost:
        set_to_leftmost(ring)
    log.debug("canonicalize: %d vertices, reversed=%s",len(ring),reversed_)
    return ring
