# backends provided by Python Standard Library

import os

backend_name = 'standard'

randombytes = os.urandom
