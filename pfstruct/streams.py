import os
import logging

from .exceptions import IOException


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around path/bytes-like objects to
    uniform the way the data is obtained: whatever is passed, read_all()
    returns the whole content as an immutable bytes object.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be read as a whole'''
        if isinstance(obj, os.PathLike):
            obj = os.fspath(obj)

        self._type = type(obj)
        self.obj = obj
        self._data = None

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of source to use' % self.obj.__class__.__name__)

        init_method()

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self.obj if self._type is str else self._type.__name__)

    def __len__(self):
        return len(self.read_all())

    def init_str(self):
        '''We think this is a path'''
        logger.debug('source is the path \'%s\'' % self.obj)

    def init_bytes(self):
        '''We think these are raw bytes'''
        self._data = self.obj

    def init_bytearray(self):
        self._data = bytes(self.obj)

    def init_memoryview(self):
        self._data = self.obj.tobytes()

    def read_all(self) -> bytes:
        '''The whole file is materialized in memory, read in binary mode.'''
        if self._data is None:
            logger.debug('opening path \'%s\'' % self.obj)
            try:
                with open(self.obj, 'rb') as f:
                    self._data = f.read()
            except OSError as e:
                logger.debug('failed to read \'%s\': %s' % (self.obj, e))
                raise IOException(chain=[self.obj], msg=f'cannot read \'{self.obj}\': {e.strerror or e}') from e

            logger.debug('read %d bytes from \'%s\'' % (len(self._data), self.obj))

        return self._data
