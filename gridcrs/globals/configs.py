#---------------------
# REFERENCING
#---------------------
# code space used when formatting identifiers, e.g. netCDF:"sea surface"
CODE_SPACE = "netCDF"
AUTHORITY_TITLE = "NetCDF"

# Earth radius (metres) of the sphere asserted for geographic/projected CRS.
# Same value as the netCDF projection framework default.
EARTH_RADIUS = 6371229.0
SPHERE_NAME = "Sphere"

# world bounds, (west, south, east, north)
WORLD_BOUNDS = (-180.0, -90.0, 180.0, 90.0)

#---------------------
# GRID TRANSFORM
#---------------------
# nice() snaps values within EPS of a multiple of 1/NICE_FACTOR
EPS = 1E-10
NICE_FACTOR = 360

#---------------------
# AXES
#---------------------
# relative tolerance when deciding if explicit axis values are evenly spaced
REGULAR_RTOL = 5.0e-3
DEFAULT_CALENDAR = "standard"

#---------------------
# CONFIGURATION FILES
#---------------------
GRID_CONFIG_NAME = "grid.yml"
LOG_FILE_NAME = "gridcrs"
