""" One relay contains many sprints of the moist thermodynamics """

import logging
import os
import time

import numpy as np

import namelist_n_constants as nl
import setup_lex as setl
import write_netcdf as write

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")


def thermo_step(fields, thermo):
    """ Add the buoyancy to the tendency of w and integrate w over one time step """
    wt = fields.wt
    wt.data = wt.data.at[:].set(0.0)
    thermo.exec()
    fields.w.data = fields.w.data + nl.dt * wt.data


os.makedirs("experiments", exist_ok=True)

# setup initial conditions
print("Setting up I.C.")
startTime = time.time()
inp, grid, fields, stats, cross, thermo = setl.setup_model(nl.ic_option)
timeSetup = time.time() - startTime

# save base state and the statistics of the initial fields
modelTime = 0.0
wallTime = time.time()
write.save2nc_base(thermo.refstate, grid)
thermo.exec_stats(modelTime)
cross.set_time(modelTime, 0)
thermo.exec_cross()
timeWrite = time.time() - wallTime

# do sprints
time1stSprint = 0.0
timeSprints = 0.0
for i in range(nl.relay_n):
    print("Sprint #%0.4i" % (i+1))
    wallTime = time.time()
    for n in range(nl.sprint_n):
        thermo_step(fields, thermo)

    if i > 0:
        timeSprints = time.time() - wallTime + timeSprints
    else:
        time1stSprint = time.time() - wallTime + time1stSprint

    wallTime = time.time()
    modelTime = np.round((i+1) * nl.sprint_n * nl.dt, decimals=6)
    thermo.exec_stats(modelTime)
    cross.set_time(modelTime, i+1)
    thermo.exec_cross()
    timeWrite = time.time() - wallTime + timeWrite

wallTime = time.time()
write.save2nc_stats(stats, grid)
timeWrite = time.time() - wallTime + timeWrite

endTime = time.time()
timeTotal = endTime - startTime

print("Completion of integration")
print("-------------------------")
print("Timing statistics")
print("***")
print("Setup:              %10.6f" % timeSetup)
print("1st Sprint:         %10.6f" % time1stSprint)
print("Other %4i Sprints: %10.6f" % (nl.relay_n-1, timeSprints))
print("Writing Data:       %10.6f" % timeWrite)
print("Total wall time:    %10.6f" % timeTotal)
print("-------------------------\n")

# end of the simulation
