# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

from powerstore_exporter.main import main

main()
