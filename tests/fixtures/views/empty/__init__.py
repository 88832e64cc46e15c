# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""A namespace with no views at all."""
