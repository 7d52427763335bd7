# Copyright (c) 2013, Citrix Inc.
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# 1. Redistributions of source code must retain the above copyright notice, this
#    list of conditions and the following disclaimer.
# 2. Redistributions in binary form must reproduce the above copyright notice,
#    this list of conditions and the following disclaimer in the documentation
#    and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND
# ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED
# WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT OWNER OR CONTRIBUTORS BE LIABLE FOR
# ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES
# (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES;
# LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND
# ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT
# (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS
# SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

"""Logging targets for the xapirpc package.

Nothing is logged until a target is opened: the command line client prints
its result on stdout and its errors on stderr, and only adds a log target
when asked to be verbose.
"""

import logging
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from typing import Union

LOG = logging.getLogger("xapirpc")
LOG.setLevel(logging.NOTSET)
LOG.addHandler(logging.NullHandler())
FORMAT = logging.Formatter(
        "%(levelname)- 9.9s[%(asctime)s] %(name)s: %(message)s",
        "%F %T")

our_handlers = []  # type: list[logging.Handler]

def openLog(lfile, level=logging.INFO):
    # type:(Union[str, TextIO], int) -> bool
    """Add a new file target to be logged to"""

    try:
        # a string is a path to append to, anything else a file-like object
        if isinstance(lfile, str):
            handler = logging.FileHandler(lfile, encoding="utf-8")  # type: logging.Handler
        else:
            handler = logging.StreamHandler(lfile)
    except OSError as exn:
        sys.stderr.write("Error opening %s as a log output: %s\n" % (lfile, exn))
        return False

    handler.setFormatter(FORMAT)
    handler.setLevel(level)
    LOG.addHandler(handler)
    if LOG.level == logging.NOTSET or LOG.level > level:
        LOG.setLevel(level)
    our_handlers.append(handler)
    return True

def closeLogs():
    """Close all logs"""
    handlers_to_remove = list(our_handlers)
    for h in handlers_to_remove:
        our_handlers.remove(h)
        LOG.removeHandler(h)
        h.close()
    LOG.setLevel(logging.NOTSET)

def logToStderr(level=logging.INFO):
    """Log to stderr"""
    return openLog(sys.stderr, level)

# export the standard logging calls at the module level

def debug(*al, **ad):
    """debug"""
    LOG.debug(*al, **ad)

def info(*al, **ad):
    """info"""
    LOG.info(*al, **ad)

def warning(*al, **ad):
    """warning"""
    LOG.warning(*al, **ad)

