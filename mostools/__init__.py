"""
Reference data and conversions for Monin-Obukhov similarity theory

Stability parameters handled here: the scaled height zeta = z/L, the
gradient and bulk Richardson numbers Ri_g and Ri_b, and the profile
functions phi_m, phi_h and their integrals psi_m, psi_h.
"""
import logging
import sys

from .config import NumericalParameters, default_parameters, get_parameters
from .errors import (MOSTError, UnknownProfile, InvalidInput,
                     StabilityWarning, DegenerateDenominator,
                     NonConvergence, StalledDerivative)
from .profiles import Profile, get_profile, list_profiles, describe_profile
from .stability import phi_m, phi_h
from .similarity import psi_m, psi_h
from .richardson import ri_g, ri_b, log_z_over_z0
from .inversion import zeta_from_rig, zeta_from_rib, InversionResult
from .reference import SampleRow, ReferenceTable, generate, reference_dataset
from .conversions import parse_value, convert

__version__ = '0.1.0'

logging.getLogger(__name__).addHandler(logging.NullHandler())


def setup_logging(level=logging.INFO, log_file=None):
    """Send log records from the 'mostools' namespace to stdout and,
    optionally, to `log_file`
    """
    logger = logging.getLogger(__name__)
    logger.setLevel(level)
    # avoid duplicate output when called more than once
    for handler in list(logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)
            handler.close()
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S')
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    return logger
