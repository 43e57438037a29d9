"""
Energy Balancer

Periodic supply/demand balancing for heavy equipment: energy sources
(fuel tank, battery) feed energy consumers (engine, hydraulics) through a
greedy, order-dependent matching pass driven by a background scheduler.

Author: Factlabel
Version: 1.0.0
"""

__version__ = "1.0.0"
__author__ = "Factlabel"
__email__ = "contact@factlabel.com"

# Application metadata
APP_NAME = "Energy Balancer"
APP_VERSION = __version__
APP_ORGANIZATION = "Factlabel"
APP_DOMAIN = "factlabel.com"
