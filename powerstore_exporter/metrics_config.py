# -----------------------------------------------------------------------------
# Copyright (c) 2025 PowerStore Metrics Exporter (scaleoutSean@Github)
# Licensed under the MIT License. See LICENSE in project root for details.
# -----------------------------------------------------------------------------

"""
Metrics configuration for the PowerStore exporter.
Defines field lists, help texts and status tables for each resource family.

Metric names and help texts match the long-standing exporter dashboards, so
some help strings keep their historical wording.
"""

# Status string -> gauge value tables. Unlisted strings map to "other".
CLUSTER_STATE = {"Configured": 1}
LIFECYCLE_STATE = {"Healthy": 1}
OPERATIONAL_STATUS = {"Started": 1}
LINK_UP = {"true": 1, "false": 0}
VOLUME_STATE = {"Ready": 1}

# Inventory collectors

CLUSTER_HELP = "cluster state ,1 is Configured,0 other"

APPLIANCE_HELP = {
    "service_tag": "service tag information",
}

HARDWARE_TYPES = ["Drive", "Fan", "Power_Supply", "Battery"]

HARDWARE_HELP = {
    "size": "disk size,unit is B",
    "lifecycle_state": "drives status,Healthy is 1",
}

PORT_TYPES = ["eth_port", "fc_port"]

PORT_PARAMS = [
    "is_link_up",
    "current_speed",
]

PORT_HELP = {
    "is_link_up": "Indicates whether the port's link is up:true is 1,false is 0",
    "current_speed": "Supported Ethernet front-end port transmission speeds,units is Gps",
}

VOLUME_PARAMS = [
    "state",
    "size",
    "logical_used",
]

VOLUME_HELP = {
    "state": "1 is ready ,0 is other",
    "size": "the unit is B",
    "logical_used": "the unit is B",
}

VOLUME_GROUP_PARAMS = [
    "logical_provisioned",
    "logical_used",
]

VOLUME_GROUP_HELP = {
    "logical_provisioned": "logical provisioned,unit is B",
    "logical_used": "logical used,unit is B",
}

FILE_SYSTEM_PARAMS = [
    "size_total",
    "size_used",
]

FILE_SYSTEM_HELP = {
    "size_total": "filesystem total size",
    "size_used": "filesystem used size",
}

NAS_HELP = {
    "operational_status": "NAS server operational status,Started is 1 other is 0",
}

# Space report (space_metrics_by_appliance)

CAPACITY_PARAMS = [
    "last_logical_provisioned",
    "last_logical_used",
    "last_physical_total",
    "last_physical_used",
    "max_logical_provisioned",
    "max_logical_used",
    "max_physical_total",
    "max_physical_used",
    "last_data_physical_used",
    "max_data_physical_used",
    "last_efficiency_ratio",
    "last_data_reduction",
    "last_snapshot_savings",
    "last_thin_savings",
    "max_efficiency_ratio",
    "max_data_reduction",
    "max_snapshot_savings",
    "max_thin_savings",
    "last_shared_logical_used",
    "max_shared_logical_used",
]

CAPACITY_HELP = {
    "last_logical_provisioned": "Last logical total space during the period,unit is B",
    "last_logical_used": "Last logical used space during the period,unit is B",
    "last_physical_total": "Last physical total space during the period,unit is B",
    "last_physical_used": "Last physical used space during the period,unit is B",
    "max_logical_provisioned": "Maxiumum logical total space during the period,unit is B",
    "max_logical_used": "Maxiumum logical used space during the period,unit is B",
    "max_physical_total": "Maximum physical total space during the period,unit is B",
    "max_physical_used": "Maximum physical used space during the period,unit is B",
    "last_data_physical_used": "Last physical used space for data during the period,unit is B",
    "max_data_physical_used": "Maximum physical used space for data during the period,unit is B",
    "last_efficiency_ratio": "Last efficiency ratio during the period.",
    "last_data_reduction": "Last data reduction space during the period.unit is B",
    "last_snapshot_savings": "Last snapshot savings space during the period.",
    "last_thin_savings": "Last thin savings ratio during the period.",
    "max_efficiency_ratio": "Maximum efficiency ratio during the period.",
    "max_data_reduction": "Maximum data reduction space during the period,unit is B",
    "max_snapshot_savings": "Maximum snapshot savings space during the period.",
    "max_thin_savings": "Maximum thin savings ratio during the period.",
    "last_shared_logical_used": "Last shared logical used during the period,unit is B",
    "max_shared_logical_used": "Max shared logical used during the period,unit is B",
}

# Performance reports (metrics/generate, last bucket)

IO_PARAMS = [
    "avg_read_latency",
    "avg_latency",
    "avg_write_latency",
    "avg_read_iops",
    "avg_read_bandwidth",
    "avg_total_iops",
    "avg_total_bandwidth",
    "avg_write_iops",
    "avg_write_bandwidth",
]

APPLIANCE_PERF_PARAMS = IO_PARAMS + [
    "avg_io_workload_cpu_utilization",
]

APPLIANCE_PERF_HELP = {
    "avg_read_latency": "avg latency of read , unit is ms",
    "avg_latency": "avg latency , unit is ms",
    "avg_write_latency": "avg latency of write , unit is ms",
    "avg_read_iops": "iops of read , unit is iops",
    "avg_read_bandwidth": "throughput of read , unit is bps",
    "avg_total_iops": "iops total , unit is iops",
    "avg_total_bandwidth": "total throughput , unit is bps",
    "avg_write_iops": "iops of write , unit is iops",
    "avg_write_bandwidth": "throughput of write , unit is bps",
    "avg_io_workload_cpu_utilization": "usage of CPU for IO workload ",
}

# shared by volume and volume group reports
BLOCK_PERF_HELP = {
    "avg_read_latency": "avg latency time of read,unit is ms",
    "avg_latency": "avg latency time,unit is ms",
    "avg_write_latency": "avg latency time of write,unit is ms",
    "avg_read_iops": "iops of read,unit is iops",
    "avg_read_bandwidth": "bandwidth of read,unit is bps",
    "avg_total_iops": "total iops,unit is iops",
    "avg_total_bandwidth": "total bandwidth,unit is bps",
    "avg_write_iops": "iops of write,unit is iops",
    "avg_write_bandwidth": "bandwidth of write,unit is bps",
}

ETH_PORT_PERF_PARAMS = [
    "avg_bytes_rx_ps",
    "avg_bytes_tx_ps",
    "avg_pkt_rx_crc_error_ps",
    "avg_pkt_rx_no_buffer_error_ps",
    "avg_pkt_rx_ps",
    "avg_pkt_tx_error_ps",
    "avg_pkt_tx_ps",
]

# Keyed without the avg_ prefix, so eth port metrics fall back to the field name
ETH_PORT_PERF_HELP = {
    "bytes_rx_ps": "receive bytes in a second",
    "bytes_tx_ps": "send bytes in a second",
    "pkt_rx_crc_error_ps": "packet receive crc error in a second",
    "pkt_rx_no_buffer_error_ps": "packet receive no buffer error in a second",
    "pkt_rx_ps": "packet receive in a second",
    "pkt_tx_error_ps": "packet send error in a second",
    "pkt_tx_ps": "packet get in a second",
}

FC_PORT_PERF_PARAMS = [
    "avg_read_latency",
    "avg_latency",
    "avg_write_latency",
    "avg_total_iops",
    "avg_total_bandwidth",
    "avg_dumped_frames_ps",
    "avg_loss_of_signal_count_ps",
    "avg_invalid_crc_count_ps",
    "avg_loss_of_sync_count_ps",
    "avg_invalid_tx_word_count_ps",
    "avg_prim_seq_prot_err_count_ps",
    "avg_link_failure_count_ps",
]

FC_PORT_PERF_HELP = {
    "avg_read_latency": "avg latency time of read,unit is ms",
    "avg_latency": "avg latency time,unit is ms",
    "avg_write_latency": "avg latency time of write,unit is ms",
    "avg_total_iops": "Total IOPS,unit is bps",
    "avg_total_bandwidth": "Total Bandwidth,unit is bps",
    "avg_dumped_frames_ps": "count of dumped frames in a second",
    "avg_loss_of_signal_count_ps": "count of loss of signal in a second",
    "avg_invalid_crc_count_ps": "count of invalid useless in a second",
    "avg_loss_of_sync_count_ps": "count of loss of sync in a second",
    "avg_invalid_tx_word_count_ps": "count of invalid send word in a second",
    "avg_prim_seq_prot_err_count_ps": "count of prim seq prot err in a second",
    "avg_link_failure_count_ps": "count of link failure in a second",
}

NAS_PERF_PARAMS = IO_PARAMS + [
    "avg_size",
    "avg_write_size",
    "avg_read_size",
]

FILE_SYSTEM_PERF_PARAMS = NAS_PERF_PARAMS + [
    "avg_block_write_iops",
    "avg_mirror_write_iops",
    "avg_block_write_bandwidth",
    "avg_mirror_write_bandwidth",
    "avg_block_write_latency",
    "avg_mirror_overhead_latency",
]

# shared by file system and NAS server reports
FILE_PERF_HELP = {
    "avg_read_latency": "Average read latency in microseconds,unit is ms",
    "avg_latency": "Average read and write latency in microseconds,unit is ms",
    "avg_write_latency": "Average write latency in microseconds,unit is ms",
    "avg_read_iops": "Total read operations per second,unit is iops",
    "avg_read_bandwidth": "Read rate in bytes per second,unit is bps",
    "avg_total_iops": "Total read and write operations per second,unit is iops",
    "avg_total_bandwidth": "Total data transfer rate in bytes per second,unit is bps",
    "avg_write_iops": "Total write operations per second,unit is iops",
    "avg_write_bandwidth": "Write rate in bytes per second,unit is bps",
    "avg_block_write_iops": "Total block write operations per second,unit is iops",
    "avg_mirror_write_iops": "Total mirror write operations per second,unit is iops",
    "avg_block_write_bandwidth": "Block write rate in byte/sec,unit is bps",
    "avg_mirror_write_bandwidth": "Mirror write rate in byte/sec,unit is bps",
    "avg_block_write_latency": "Average block write latency in microsecond,unit is ms",
    "avg_mirror_overhead_latency": "Average additional latency incurred on the source in order to do the remote mirror writes in microseconds,unit is ms",
    "avg_size": "Average size of read and write operations in bytes.unit is bytes",
    "avg_write_size": "Average write size in bytes.unit is bytes",
    "avg_read_size": "Average read size in bytes.unit is bytes",
}

DRIVE_WEAR_PARAMS = [
    "percent_endurance_remaining",
]

DRIVE_WEAR_HELP = "this is the percent of endurance remaining about drives"
