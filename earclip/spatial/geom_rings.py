"""
Convert between shapely geometries and the ring lists used for ear
clipping, and read/write simple geometry files.

An entity is a list of rings, each ring an [N,2] array without the
repeated closing point.  Holes are returned as separate rings and get
triangulated independently, the same as the outer ring.

Input files are either WKT, one geometry per line, or GeoJSON
(FeatureCollection, Feature or bare geometry).
"""
import json
import logging
import os

import numpy as np
from shapely import wkt
from shapely import geometry
from shapely.geometry import Polygon,MultiPolygon

log=logging.getLogger(__name__)

class UnsupportedGeometry(Exception):
    pass

class InputFormatError(Exception):
    pass

def ring_coords(linear_ring):
    coords=np.array(linear_ring.coords,np.float64)[:,:2]
    if len(coords)>1 and np.all(coords[0]==coords[-1]):
        coords=coords[:-1]
    return coords

def geometry_to_entity(geom):
    """
    geom: shapely Polygon or MultiPolygon
    returns list of rings, exterior before interiors for each polygon.
    Empty geometries give an empty list.
    """
    if isinstance(geom,Polygon):
        polys=[geom]
    elif isinstance(geom,MultiPolygon):
        polys=list(geom.geoms)
    else:
        raise UnsupportedGeometry("Expected Polygon or MultiPolygon, got %s"%geom.geom_type)

    rings=[]
    for poly in polys:
        if poly.is_empty:
            continue
        rings.append(ring_coords(poly.exterior))
        for interior in poly.interiors:
            rings.append(ring_coords(interior))
    return rings

def read_wkt(fn):
    entities=[]
    with open(fn,'rt') as fp:
        for lineno,line in enumerate(fp,start=1):
            line=line.strip()
            if not line or line.startswith('#'):
                continue
            try:
                geom=wkt.loads(line)
            except Exception as exc:
                raise InputFormatError("%s:%d: could not parse WKT (%s)"%(fn,lineno,exc))
            entities.append(geometry_to_entity(geom))
    return entities

def feature_geometry(fn,feat):
    # geometry may be null, but the member has to be there
    if not isinstance(feat,dict) or 'geometry' not in feat:
        raise InputFormatError("%s: Feature without a geometry member"%fn)
    return feat['geometry']

def read_geojson(fn):
    with open(fn,'rt') as fp:
        try:
            data=json.load(fp)
        except ValueError as exc:
            raise InputFormatError("%s: not valid JSON (%s)"%(fn,exc))

    if not isinstance(data,dict):
        raise InputFormatError("%s: expected a JSON object, got %s"%(fn,type(data).__name__))

    if data.get('type')=='FeatureCollection':
        features=data.get('features')
        if not isinstance(features,list):
            raise InputFormatError("%s: FeatureCollection without a features list"%fn)
        geoms=[feature_geometry(fn,feat) for feat in features]
    elif data.get('type')=='Feature':
        geoms=[feature_geometry(fn,data)]
    elif 'coordinates' in data:
        geoms=[data]
    else:
        raise InputFormatError("%s: not a GeoJSON FeatureCollection, Feature or geometry"%fn)

    entities=[]
    for i,g in enumerate(geoms):
        if g is None:
            continue
        try:
            geom=geometry.shape(g)
        except Exception as exc:
            raise InputFormatError("%s: geometry %d could not be parsed (%s)"%(fn,i,exc))
        entities.append(geometry_to_entity(geom))
    return entities

readers={'wkt':read_wkt,
         'geojson':read_geojson}

def guess_format(fn):
    ext=os.path.splitext(fn)[1].lower()
    if ext in ('.json','.geojson'):
        return 'geojson'
    return 'wkt'

def read_entities(fn,fmt=None):
    """
    Read a list of entities from fn.  fmt is 'wkt' or 'geojson', by
    default chosen from the file extension.
    """
    if fmt is None:
        fmt=guess_format(fn)
    if fmt not in readers:
        raise InputFormatError("Unknown format %s, expected one of %s"%(fmt,", ".join(sorted(readers))))
    if not os.path.exists(fn):
        raise InputFormatError("File '%s' not found"%fn)
    entities=readers[fmt](fn)
    log.info("Read %d entities from %s",len(entities),fn)
    return entities

def triangles_to_geometry(triangles):
    """ MultiPolygon with one part per triangle """
    return MultiPolygon([geometry.Polygon(tri) for tri in triangles])

def write_wkt(fn,results):
    """
    results: sequence of EntityResult.  One MULTIPOLYGON line per entity.
    """
    with open(fn,'wt') as fp:
        for result in results:
            fp.write(triangles_to_geometry(result.triangles).wkt)
            fp.write("\n")
