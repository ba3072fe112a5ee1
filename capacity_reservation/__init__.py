# Copyright (c) 2025 OptimNow - Jean Latiere. All Rights Reserved.
# Licensed under the Proprietary Software License.
# See LICENSE file in the project root for full license information.

"""Resource handler for AWS::EC2::CapacityReservation."""

__version__ = "0.1.0"
