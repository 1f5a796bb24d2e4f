"""
Grid Constants
==============

Fixed numeric constants of the icosahedral aperture-7 hexagonal grid.

All angles are in radians. Distances on the unit sphere are converted with
EARTH_RADIUS_KM, the authalic radius of the WGS84 ellipsoid.
"""

import math

# ============================================================================
# ANGLES
# ============================================================================

M_2PI = 2.0 * math.pi
M_PI_2 = math.pi / 2.0
M_SQRT3_2 = 0.8660254037844386467637231707529361834714
M_RSIN60 = 1.0 / M_SQRT3_2
M_SQRT7 = 2.6457513110645905905016157536392604257102

# rotation angle between Class II and Class III resolution axes, asin(sqrt(3/28))
M_AP7_ROT_RADS = 0.333473172251832115336090755351601070065900389

# scaling factor from hex2d resolution 0 unit length to gnomonic unit length
RES0_U_GNOMONIC = 0.38196601125010500003

EPSILON = 0.0000000000000001
FLT_EPSILON = 1.1920929e-07

EARTH_RADIUS_KM = 6371.007180918475

# ============================================================================
# GRID LAYOUT
# ============================================================================

MAX_RES = 15
NUM_ICOSA_FACES = 20
NUM_BASE_CELLS = 122
NUM_PENTAGONS = 12
NUM_HEX_VERTS = 6
NUM_PENT_VERTS = 5
MAX_CELL_BOUNDARY_VERTS = 10

# res 0 lattice coordinates never exceed this on a single face
MAX_FACE_COORD = 2

# disk radius that covers every cell at the finest resolution
MAX_GRID_DISK_K = 13780510
