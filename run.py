from gevent import monkey
monkey.patch_all()

import sys

from albums.run import main

if __name__ == '__main__':
    sys.exit(main())
