import itertools

import numpy as np

def set_keywords(obj,kw):
    """
    Utility for __init__ methods to update object state with
    keyword arguments.  Checks that the attributes already
    exist, to avoid spelling mistakes.  Uses getattr and
    setattr for compatibility with properties.
    """
    for k in kw:
        try:
            getattr(obj,k)
        except AttributeError:
            raise Exception("Setting attribute %s failed because it doesn't exist on %s"%(k,obj))
        setattr(obj,k,kw[k])

def circular_pairs(iterable):
    """
    like pairwise, but closes the loop.
    s -> (s0,s1), (s1,s2), (s2, s3), ..., (sN,s0)
    """
    a, b = itertools.tee(iterable)
    b = itertools.cycle(b)
    next(b, None)
    return zip(a, b)

def bounds(pnts):
    """
    returns array [{lower,upper},pnts.shape[-1]]
    """
    pnts=np.asarray(pnts)
    lower = pnts
    upper = pnts
    while len(lower.shape)>1:
        lower = lower.min(axis=0)
        upper = upper.max(axis=0)
    return np.array([lower,upper])
