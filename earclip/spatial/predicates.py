"""
Plain floating point predicates for ear clipping.

Points are anything with .x and .y attributes (Vertex), or use the
_xy variants below for bare (x,y) pairs.

THESE ARE NOT ROBUST!  Colinearity is tested with exact equality
against zero, with no tolerance.  Nearly degenerate triples can land on
either side, and which ears get accepted depends on that.  Adding
an epsilon changes the output near degenerate input.
"""

def orientation_xy(x1,y1,x2,y2,x3,y3):
    """
    The turn at p2 walking p1->p2->p3.  Positive (or zero) for
    a right turn, which is convex for a clockwise ring.
    """
    return (y2-y1)*(x3-x2) - (y3-y2)*(x2-x1)

def colinear_xy(x1,y1,x2,y2,x3,y3):
    return x1*(y2-y3) + x2*(y3-y1) + x3*(y1-y2)

def is_colinear(p1,p2,p3):
    """
    True if the three points lie exactly on one line.
    """
    return colinear_xy(p1.x,p1.y,p2.x,p2.y,p3.x,p3.y) == 0

def is_convex(p1,p2,p3):
    """
    True if p1,p2,p3 make a convex corner at p2 *for a clockwise ring*.
    Colinear triples are never convex.  On a CCW ring the meaning
    is inverted, so canonicalize with orientation.set_clockwise() first.
    """
    if is_colinear(p1,p2,p3):
        return False
    return orientation_xy(p1.x,p1.y,p2.x,p2.y,p3.x,p3.y) >= 0

def point_in_triangle(p1,p2,p3,p):
    """
    Barycentric test, True only when p is strictly inside the
    triangle p1,p2,p3 -- points on an edge or a vertex are outside.

    Precondition: the triangle is not degenerate (callers only pass
    triangles which passed is_convex).  A zero denominator returns
    False rather than raising.
    """
    denom = (p2.y-p3.y)*(p1.x-p3.x) + (p3.x-p2.x)*(p1.y-p3.y)
    if denom == 0:
        return False
    alpha = ((p2.y-p3.y)*(p.x-p3.x) + (p3.x-p2.x)*(p.y-p3.y)) / denom
    beta = ((p3.y-p1.y)*(p.x-p3.x) + (p1.x-p3.x)*(p.y-p3.y)) / denom
    gamma = 1.0 - alpha - beta
    return alpha>0 and beta>0 and gamma>0

def is_reflex(p1,p2,p3):
    """
    True if the corner at p2 turns the wrong way for a clockwise ring.
    Colinear corners are neither convex nor reflex.
    """
    if is_colinear(p1,p2,p3):
        return False
    return orientation_xy(p1.x,p1.y,p2.x,p2.y,p3.x,p3.y) < 0
