from .donor import Donor
from .hospital import Hospital
from .user import User
