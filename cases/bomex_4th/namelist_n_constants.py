""" Namelist variables and constants for LEX: cumulus boundary layer with 4th-order interpolation """

# Time integration
dt = 5.0           # one-step integration time step
sprint_n = 6       # dt*sprint_n is the interval of statistics and cross-section output
relay_n = 12       # number of sprints, relay_n*sprint_n*dt is the total integration time

# Grid configuration
dx = 50.0    # x-direction grid spacing in meters
dy = 50.0    # y-direction grid spacing in meters
dz = 25.0    # z-direction grid spacing in meters
nx = 32      # number of grid cells in x-direction
ny = 32      # number of grid cells in y-direction
nz = 120     # number of grid cells in z-direction
ngx = 1      # number of ghost points on one side of the x-direction
ngy = 1      # number of ghost points on one side of the y-direction
swspatialorder = 4    # 2 or 4; sets the number of vertical ghost points (1 or 2)

# Thermodynamics
ps = 101500.0               # surface pressure (Pa), required
swupdatebasestate = True    # recompute the reference state every step
crosslist = ["b", "blngrad", "ql", "qlpath", "bbot", "bfluxbot"]
sat_adjust_max_iter = 10    # Newton iterations allowed in the saturation adjustment

# Fields
svisc = 1.0e-5    # molecular diffusivity of the scalars
tPr = 1.0 / 3.0   # turbulent Prandtl number
diff_opt = "4"    # "les2s": eddy-viscosity fluxes; "4": 4th-order molecular fluxes

# Cross sections
cross_xz = [0]     # y-indices of the xz cross-sections
cross_xy = [0, 20, 40]   # z-indices of the xy cross-sections

# Initial condition choice
ic_option = 1
rand_opt = True

# output file name
stats_file_name = "experiments/lex_thermo_stats.nc"
base_file_name = "experiments/lex_reference_state.nc"
cross_file_format = "experiments/lex_cross_%s_%0.7i.zarr"

# Physical constants
Rd = 287.04    # Gas constant of dry air
Rv = 461.5     # Gas constant of water vapor
Cp = 1005.0    # Specific heat of air at constant pressure
eps = Rd/Rv
repsm1 = Rv/Rd - 1.0
lat_vap = 2.5e6    # latent heat of evaporation
rho_w = 1.0e3      # density of liquid water
tmelt = 273.15     # melting temperature of ice
g = 9.81           # acceleration of gravity
p00 = 100000.0     # reference pressure of the Exner function
