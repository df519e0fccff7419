# random bytes from libsodium (randombytes_buf)

import nacl.utils

backend_name = 'pynacl'

randombytes = nacl.utils.random
