#!/usr/bin/env python

from jointaf.core.params import Params
from jointaf.core.exceptions import JointAFError
