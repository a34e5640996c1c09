""" Error types raised by the moist thermodynamics """


class ThermoError(RuntimeError):
    """ Base class of the thermodynamics errors """


class ConfigurationError(ThermoError):
    """ Missing or invalid input, detected while setting up the run """


class NumericalDivergence(ThermoError):
    """ The saturation adjustment did not converge within the allowed iterations """

    def __init__(self, n_points, max_iter):
        self.n_points = n_points
        self.max_iter = max_iter
        super().__init__(
            "Saturation adjustment did not converge in %i iterations for %i grid points" % (max_iter, n_points))


class UnsupportedOperation(ThermoError):
    """ A field or function that the moist thermodynamics does not provide """
