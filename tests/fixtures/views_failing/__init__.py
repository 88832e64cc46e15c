# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Views that make a scan fail."""
