# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

from viewscan.demo import main

main()
