r"""
 Copyright 2023 GSI Technology, Inc.

 Permission is hereby granted, free of charge, to any person obtaining a copy of
 this software and associated documentation files (the “Software”), to deal in
 the Software without restriction, including without limitation the rights to
 use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of
 the Software, and to permit persons to whom the Software is furnished to do so,
 subject to the following conditions:

 The above copyright notice and this permission notice shall be included in all
 copies or substantial portions of the Software.

 THE SOFTWARE IS PROVIDED “AS IS”, WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
 IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY, FITNESS
 FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR
 COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER
 IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
 CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.
"""

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

DEFINE_TOKEN = "#define"

DEFAULT_HEADER_PATH = \
    "newlib/newlib/libc/sys/xtensa/include/xtensa/config/core-isa.h"

XCHAL_USE_MEMCTL = "XCHAL_USE_MEMCTL"
XCHAL_LOOP_BUFFER_SIZE = "XCHAL_LOOP_BUFFER_SIZE"
XCHAL_DCACHE_IS_COHERENT = "XCHAL_DCACHE_IS_COHERENT"
XCHAL_HAVE_ICACHE_DYN_WAYS = "XCHAL_HAVE_ICACHE_DYN_WAYS"
XCHAL_HAVE_DCACHE_DYN_WAYS = "XCHAL_HAVE_DCACHE_DYN_WAYS"
