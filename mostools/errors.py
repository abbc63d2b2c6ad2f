"""
Exceptions and warnings raised by the stability library

Exceptions are fatal to the call that raised them. Warnings flag a
result that was still returned (a safe fallback value or a best-effort
root) but should be treated as low-confidence by the caller.
"""


class MOSTError(Exception):
    """Base class for errors raised by mostools"""


class UnknownProfile(MOSTError, KeyError):
    """Requested profile name is not in the registry"""
    def __init__(self, name, known=()):
        self.name = name
        self.known = tuple(known)
        super().__init__(name)

    def __str__(self):
        msg = 'Unknown profile: {}'.format(self.name)
        if self.known:
            msg += ' (expected one of {})'.format(', '.join(self.known))
        return msg


class InvalidInput(MOSTError, ValueError):
    """Conversion input could not be interpreted as a number"""


class StabilityWarning(RuntimeWarning):
    """Base class for low-confidence numerical results"""


class DegenerateDenominator(StabilityWarning):
    """Bulk Richardson denominator collapsed; 0 was returned instead

    Usually means log(z/z0) is too small relative to psi_m.
    """


class NonConvergence(StabilityWarning):
    """Newton-Raphson ran out of iterations; last iterate was returned"""


class StalledDerivative(NonConvergence):
    """Numerical derivative underflowed during Newton-Raphson"""
