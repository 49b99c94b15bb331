# Copyright (c) 2026 WPMCP Contributors. All Rights Reserved.
