# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Constructor-assigned views and postponed annotations."""
