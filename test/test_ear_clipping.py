import numpy as np
from shapely import geometry
from shapely.ops import unary_union

from earclip.spatial.ring import Ring
from earclip.spatial import ear_clipping, orientation, predicates
from earclip.spatial.ear_clipping import triangulate, Triangle
from earclip.spatial.diagnostics import NonConvergence

square=[(0,0),(10,0),(10,10),(0,10)]
ell=[(0,0),(10,0),(10,5),(5,5),(5,10),(0,10)]

def total_area(tris):
    return sum(t.area for t in tris)

def test_square():
    tris=triangulate(square)
    assert len(tris)==2
    assert np.isclose(total_area(tris),100.0)

def test_triangle():
    tri=[(0,0),(10,0),(5,10)]
    tris=triangulate(tri)
    assert len(tris)==1
    assert set(tris[0])==set( (float(x),float(y)) for x,y in tri)

def test_colinear_triangle():
    ring=Ring.from_points( [(0,0),(5,0),(10,0)] )
    orientation.canonicalize(ring)
    tris=ear_clipping.get_triangles(ring)
    assert tris==[]
    assert ring.size()==0

def test_ell():
    tris=triangulate(ell)
    assert len(tris)==len(ell)-2
    for t in tris:
        assert t.area>0
        # clockwise, like the ring they were cut from
        assert t.signed_area<0
    poly=geometry.Polygon(ell)
    assert np.isclose(total_area(tris),poly.area)
    union=unary_union([t.to_polygon() for t in tris])
    assert np.isclose(union.area,poly.area)
    assert union.symmetric_difference(poly).area < 1e-9

def test_ell_ear_order():
    ring=Ring.from_points(ell)
    orientation.canonicalize(ring)
    tris=ear_clipping.get_triangles(ring)
    assert tris[0]==Triangle( (0.,10.),(5.,10.),(5.,5.) )
    assert tris[-1]==Triangle( (0.,0.),(0.,10.),(5.,5.) )

def test_lazy():
    ring=Ring.from_points(ell)
    orientation.canonicalize(ring)
    gen=ear_clipping.iter_triangles(ring)
    first=next(gen)
    assert first.area>0
    assert ring.size()==len(ell)-1
    rest=list(gen)
    assert len(rest)==len(ell)-3
    assert ring.size()==0
    # not restartable
    assert list(gen)==[]

def test_convex_polygons():
    for n in [5,6,12,40]:
        theta=np.linspace(0,2*np.pi,n,endpoint=False)
        pnts=np.c_[100*np.cos(theta),50*np.sin(theta)] + [1000,2000]
        tris=triangulate(pnts)
        assert len(tris)==n-2
        assert np.isclose(total_area(tris),geometry.Polygon(pnts).area)
        for t in tris:
            a,b,c=Ring.from_points(t)
            assert predicates.is_convex(a,b,c)

def test_either_winding():
    cw=triangulate(ell[::-1])
    ccw=triangulate(ell)
    assert np.isclose(total_area(cw),total_area(ccw))

def test_degenerate_quad():
    # one half of the p0-p2 split is colinear
    tris=triangulate( [(0,0),(5,0),(10,0),(5,5)] )
    assert len(tris)==1
    assert np.isclose(tris[0].area,25.0)

def test_too_small():
    assert triangulate([])==[]
    assert triangulate([(0,0)])==[]
    ring=Ring.from_points( [(0,0),(1,1)] )
    assert ear_clipping.get_triangles(ring)==[]
    assert ring.size()==0

def test_find_inside_checks_deleted():
    ring=Ring.from_points( [(0,0),(0,10),(10,0),(2,2),(20,20)] )
    ring.delete(3)
    p=ear_clipping.find_inside(ring,ring[0],ring[1],ring[2])
    assert p is ring[3]
    ring=Ring.from_points( [(0,0),(0,10),(10,0),(0,0)] )
    # a coincident copy of a corner is on the boundary, not inside
    assert ear_clipping.find_inside(ring,ring[0],ring[1],ring[2]) is None

def test_ccw_ring_does_not_converge():
    # without canonicalizing, no convex corner is ever found
    theta=np.linspace(0,2*np.pi,5,endpoint=False)
    pnts=np.c_[np.cos(theta),np.sin(theta)]
    ring=Ring.from_points(pnts)
    try:
        ear_clipping.get_triangles(ring)
        assert False,"Should have raised NonConvergence"
    except NonConvergence as exc:
        assert exc.loop_count==15
        assert exc.n_original==5
        assert exc.n_remaining==5
        assert len(exc.remaining)==5
        assert exc.triangles==[]
    assert ring.size()==5

def test_colinear_ring_does_not_hang():
    try:
        triangulate( [(i,0) for i in range(5)] )
        assert False,"Should have raised NonConvergence"
    except NonConvergence as exc:
        assert exc.n_remaining==5
        assert sorted(r.x for r in exc.remaining)==[0,1,2,3,4]

def test_loop_factor():
    ring=Ring.from_points( [(i,0) for i in range(6)] )
    try:
        ear_clipping.get_triangles(ring,loop_factor=1)
        assert False
    except NonConvergence as exc:
        assert exc.loop_count==6

def test_iter_raises_after_partial():
    ring=Ring.from_points( [(i,0) for i in range(5)] )
    gen=ear_clipping.iter_triangles(ring)
    try:
        list(gen)
        assert False
    except NonConvergence:
        pass

def test_arrays():
    tris=triangulate(square)
    arr=ear_clipping.triangles_to_array(tris)
    assert arr.shape==(2,3,2)
    flat=ear_clipping.triangles_to_vertices(tris)
    assert flat.shape==(6,2)
    assert np.all(flat[:3]==arr[0])
    assert ear_clipping.triangles_to_array([]).shape==(0,3,2)
    assert np.allclose(tris[0].to_array(),arr[0])

def test_simplified():
    # the extra point next to (1000,1000) is dropped before triangulating
    pnts=[(1000,1000),(1000.5,1000.5),(2000,1000),(2000,2000),(1000,2000)]
    tris=triangulate(pnts,threshold=100)
    assert len(tris)==2
    assert np.isclose(total_area(tris),1e6)

def test_dart_quad():
    # reflex corner at (5,2), which ends up as p3 of the quad
    dart=[(0,0),(5,2),(10,0),(5,10)]
    tris=triangulate(dart)
    assert len(tris)==2
    assert np.isclose(total_area(tris),40.0)
    poly=geometry.Polygon(dart).buffer(1e-9)
    for t in tris:
        assert t.signed_area<0
        assert poly.contains(t.to_polygon())

def random_star(rs,n):
    theta=np.sort(rs.uniform(0,2*np.pi,n))
    r=rs.uniform(3,10,n)
    return np.c_[r*np.cos(theta),r*np.sin(theta)]

def test_random_simple_rings():
    rs=np.random.RandomState(0)
    checked=0
    for i in range(200):
        pnts=random_star(rs,rs.randint(5,13))
        poly=geometry.Polygon(pnts)
        if not poly.is_valid:
            continue
        tris=triangulate(pnts)
        assert len(tris)==len(pnts)-2
        assert np.isclose(total_area(tris),poly.area)
        fat=poly.buffer(1e-9)
        for t in tris:
            assert fat.contains(t.to_polygon())
        checked+=1
    assert checked>100
