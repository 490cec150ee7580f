"""
Command line interface for triangulating polygon files.

Access this with something like:
  python -m earclip.cli -i polygons.wkt -t 1200 -o triangles.wkt
"""
import shlex
import sys
import argparse
import logging

import numpy as np

from . import batch, utils
from .spatial import geom_rings

log=logging.getLogger('earclip.cli')

parser = argparse.ArgumentParser(description='Triangulate polygons by ear clipping.')

parser.add_argument("-i", "--input", help="Polygon file, WKT (one geometry per line) or GeoJSON",
                    required=True)
parser.add_argument("-f", "--format", help="Input format, one of %s. Default from extension"%
                    ", ".join(sorted(geom_rings.readers)),
                    default=None)
parser.add_argument("-o", "--output", help="Write triangles as WKT, one MULTIPOLYGON per entity",
                    default=None)
parser.add_argument("-t", "--threshold", help="Simplification threshold: 0 keeps all points, "
                    "otherwise drop points closer than prev/threshold to the previous point",
                    type=float, default=0.0)
parser.add_argument("-w", "--workers", help="Worker processes, default %d x cpu count"%batch.WORKER_FACTOR,
                    type=int, default=None)
parser.add_argument("--no-leftmost", help="Don't rotate rings to start at the leftmost vertex",
                    dest='leftmost', action='store_false')
parser.add_argument("-v", "--verbose", help="Debug logging", action='store_true')

def parse_and_run(cmd=None):
    if cmd is not None:
        # allows for calling from a script with the same command line
        argv=shlex.split(cmd)
        args=parser.parse_args(argv)
    else:
        args=parser.parse_args()

    if args.workers is not None and args.workers<1:
        parser.error("--workers must be at least 1, got %d"%args.workers)
    if args.threshold<0:
        parser.error("--threshold must be non-negative, got %g"%args.threshold)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    print("processing file:%s Trimfactor:%g"%(args.input,args.threshold))
    try:
        entities=geom_rings.read_entities(args.input,fmt=args.format)
    except (geom_rings.InputFormatError,geom_rings.UnsupportedGeometry) as exc:
        log.error("%s",exc)
        sys.exit(1)

    all_points=[ring for rings in entities for ring in rings if len(ring)]
    if all_points:
        lower,upper=utils.bounds(np.concatenate(all_points))
        log.info("Extent x: %g to %g, y: %g to %g",lower[0],upper[0],lower[1],upper[1])

    summary=batch.triangulate_entities(entities,threshold=args.threshold,
                                       leftmost=args.leftmost,workers=args.workers)
    print(summary.report())
    if summary.n_failed_rings:
        print("%d rings did not converge"%summary.n_failed_rings)

    if args.output is not None:
        geom_rings.write_wkt(args.output,summary.results)
        log.info("Wrote triangles to %s",args.output)
    return summary

if __name__ == '__main__':
    parse_and_run()
