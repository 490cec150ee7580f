"""
Vertex ring for ear clipping.

A Ring is a fixed set of vertices with logical deletion: a vertex is
never removed from storage, only flagged as deleted, and the ring keeps a
count of the live ones.  Scanning is done with first()/next(), which
skip deleted vertices and do *not* wrap around.

Rotation (move_to_back/move_to_front) shifts which stored vertex is at
index 0.  Storage itself doesn't move: indices are taken relative to a
start offset, so a rotation is O(1) but the visiting order is the same
as physically shifting an array by one.
"""
import logging

import numpy as np

log=logging.getLogger(__name__)

class Vertex(object):
    __slots__=['x','y','deleted']

    def __init__(self,x,y,deleted=False):
        self.x=float(x)
        self.y=float(y)
        self.deleted=deleted

    @property
    def xy(self):
        return (self.x,self.y)

    def __str__(self):
        return "Deleted: %s, X:%r, Y:%r"%(self.deleted,self.x,self.y)

    def __repr__(self):
        return "Vertex(%r,%r,deleted=%s)"%(self.x,self.y,self.deleted)


def as_xy(point):
    if isinstance(point,Vertex):
        return point.x,point.y
    return float(point[0]),float(point[1])


class Ring(object):
    """
    threshold: default simplification threshold for push_back(). 0
    keeps every point.
    """
    threshold=0.0

    def __init__(self,threshold=None):
        self._vertices=[] # storage, in insertion order
        self._start=0     # storage offset of index 0
        self._size=0      # live count
        self.pos=None     # cursor, None until first()
        if threshold is not None:
            self.threshold=threshold

    @classmethod
    def from_points(cls,points,threshold=None):
        ring=cls(threshold=threshold)
        for p in points:
            ring.push_back(p)
        return ring

    # Storage access, all indices relative to the current rotation
    def __len__(self):
        """ number of stored vertices, deleted or not """
        return len(self._vertices)

    def __getitem__(self,i):
        N=len(self._vertices)
        if not -N <= i < N:
            raise IndexError("ring index %d out of range"%i)
        return self._vertices[(self._start+i)%N]

    def __iter__(self):
        N=len(self._vertices)
        for i in range(N):
            yield self._vertices[(self._start+i)%N]

    @property
    def vertices(self):
        """ list of all vertices in ring order """
        return list(self)

    def set_order(self,vertices):
        """
        Replace the ring order with the given list, which must hold the
        same Vertex objects.  Used for reversal and rotation in
        orientation.py.  Resets the cursor.
        """
        vertices=list(vertices)
        if len(vertices)!=len(self._vertices):
            raise ValueError("set_order: expected %d vertices, got %d"%(len(self._vertices),
                                                                         len(vertices)))
        self._vertices=vertices
        self._start=0
        self.pos=None

    def _normalize(self):
        if self._start:
            self._vertices=list(self)
            self._start=0

    def push_back(self,point,threshold=None):
        """
        Append a point (x,y pair or Vertex) as a new live vertex.

        With threshold>0, the point is skipped when it duplicates the
        previous point, or when both |dx| < prev.x/threshold and
        |dy| < prev.y/threshold.  Note the tolerance scales with the
        magnitude of the previous coordinate, not with a fixed distance,
        and is never met when the previous coordinate is negative.

        Returns True if the point was added.
        """
        if threshold is None:
            threshold=self.threshold
        if threshold<0:
            raise ValueError("Simplification threshold must be non-negative, got %r"%threshold)
        x,y=as_xy(point)

        if threshold>0 and len(self._vertices)>0:
            prev=self[-1]
            pct_x=prev.x/threshold
            pct_y=prev.y/threshold
            if ( (prev.x==x and prev.y==y) or
                 (abs(prev.x-x)<pct_x and abs(prev.y-y)<pct_y) ):
                log.debug("push_back: dropping %r,%r, too close to %r,%r",x,y,prev.x,prev.y)
                return False

        self._normalize()
        self._vertices.append(Vertex(x,y))
        self._size+=1
        return True

    # Traversal
    def first(self):
        """
        Return (vertex,index) of the first live vertex and set the cursor
        there, or (None,None) if all are deleted.
        """
        for i,v in enumerate(self):
            if not v.deleted:
                self.pos=i
                return v,i
        return None,None

    def next(self):
        """
        Return (vertex,index) of the next live vertex after the cursor,
        advancing the cursor.  Does not wrap: (None,None) past the end.
        """
        start=0 if self.pos is None else self.pos+1
        for i in range(start,len(self._vertices)):
            v=self[i]
            if not v.deleted:
                self.pos=i
                return v,i
        return None,None

    def last(self):
        """ (vertex,index) of the last live vertex, cursor unchanged """
        for i in range(len(self._vertices)-1,-1,-1):
            v=self[i]
            if not v.deleted:
                return v,i
        return None,None

    def delete(self,i):
        v=self[i]
        if v.deleted:
            return
        v.deleted=True
        self._size-=1

    def undelete_all(self):
        for v in self._vertices:
            v.deleted=False
        self._size=len(self._vertices)
        self.pos=0

    def size(self):
        """ live count """
        return self._size

    # Rotation
    def move_to_back(self):
        """
        Rotate so the vertex at index 0 becomes the last one, then point
        the cursor at the first live vertex.
        """
        if self._vertices:
            self._start=(self._start+1)%len(self._vertices)
        self.first()

    def move_to_front(self):
        """ inverse of move_to_back """
        if self._vertices:
            self._start=(self._start-1)%len(self._vertices)
        self.first()

    def centroid(self):
        """
        Mean of all stored coordinates, deleted or not.  None for
        an empty ring.
        """
        if not self._vertices:
            return None
        return self.to_array().mean(axis=0)

    def to_array(self,live_only=False):
        """ [N,2] array of coordinates in ring order """
        xy=[v.xy for v in self if not (live_only and v.deleted)]
        return np.array(xy,np.float64).reshape([-1,2])

    def __str__(self):
        st="\n"
        for v in self:
            st+="|%s |"%v
        st+="pos: %s"%self.pos
        return st
