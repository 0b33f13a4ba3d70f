from unittest.mock import MagicMock

from fakes import ARRAY_IP, StubCache, samples_of
from powerstore_exporter.collectors import (
    ApplianceCollector,
    AppliancePerformanceCollector,
    CapacityCollector,
    ClusterCollector,
    DriveWearCollector,
    EthPortPerformanceCollector,
    FcPortPerformanceCollector,
    FileSystemCollector,
    FileSystemPerformanceCollector,
    HardwareCollector,
    NasCollector,
    NasPerformanceCollector,
    PortCollector,
    VolumeCollector,
    VolumeGroupCollector,
    VolumeGroupPerformanceCollector,
    VolumePerformanceCollector,
)
from powerstore_exporter.errors import RequestError


def labels(**values):
    values["IP"] = ARRAY_IP
    return values


def test_cluster(array, client):
    array.lists["cluster"] = [
        {"name": "PS-1", "global_id": "PS00001", "master_appliance_id": "A1",
         "management_address": "10.0.0.1", "state": "Configured"},
        {"name": "PS-2", "global_id": "PS00002", "master_appliance_id": "A1",
         "management_address": "10.0.0.2", "state": "Expanding"},
        {"name": "PS-3", "global_id": "PS00003", "master_appliance_id": "A1",
         "management_address": "10.0.0.3", "state": None},
    ]
    samples = samples_of(ClusterCollector(client, StubCache()))

    assert samples["powerstore_cluster"] == [
        (labels(master_appliance_id="A1", global_id="PS00001", management_address="10.0.0.1", name="PS-1"), 1.0),
        (labels(master_appliance_id="A1", global_id="PS00002", management_address="10.0.0.2", name="PS-2"), 0.0),
    ]


def test_cluster_failure_yields_nothing(array, client):
    array.fail_paths["cluster"] = 500
    assert samples_of(ClusterCollector(client, StubCache())) == {}


def test_appliance_skips_missing_service_tag(array, client):
    array.lists["appliance"] = [
        {"id": "A1", "name": "appliance-1", "service_tag": "ABC1234"},
        {"id": "A2", "name": "appliance-2", "service_tag": None},
    ]
    samples = samples_of(ApplianceCollector(client, StubCache()))

    assert samples["powerstore_appliance"] == [(labels(service_tag="ABC1234", appliance_id="A1"), 0.0)]


def test_hardware(array, client):
    hardware = {
        "eq.Node": [{"name": "BaseEnclosure-NodeA", "serial_number": "SN1",
                     "lifecycle_state": "Healthy", "appliance_id": "A1"}],
        "eq.Drive": [
            {"name": "Drive_0", "appliance_id": "A1", "lifecycle_state": "Healthy",
             "extra_details": {"size": 1920383410176, "drive_type": "NVMe_SSD"}},
            {"name": "Drive_1", "appliance_id": "A1", "lifecycle_state": "Failed",
             "extra_details": {"size": None}},
        ],
        "eq.Fan": [{"name": "Fan_0", "appliance_id": "A1", "lifecycle_state": None}],
        "eq.Battery": [{"name": "Battery_0", "appliance_id": "A1", "lifecycle_state": "Healthy"}],
    }

    def by_type(params):
        if params["type"] == "eq.Power_Supply":
            return {"error": "not a list"}
        return hardware.get(params["type"], [])

    array.lists["hardware"] = by_type
    samples = samples_of(HardwareCollector(client, StubCache()))

    assert samples["powerstore_hardware_node_state"] == [
        (labels(name="BaseEnclosure-NodeA", serial_number="SN1", state="Healthy", appliance_id="A1"), 1.0),
    ]
    assert samples["powerstore_hardware_Drive_state"] == [
        (labels(name="Drive_0", appliance_id="A1"), 1.0),
        (labels(name="Drive_1", appliance_id="A1"), 0.0),
    ]
    assert samples["powerstore_hardware_drive_size"] == [
        (labels(name="Drive_0", appliance_id="A1", drive_type="NVMe_SSD"), 1920383410176.0),
    ]
    assert samples["powerstore_hardware_Battery_state"] == [(labels(name="Battery_0", appliance_id="A1"), 1.0)]
    assert "powerstore_hardware_Fan_state" not in samples
    assert "powerstore_hardware_Power_Supply_state" not in samples


def test_hardware_type_failure_does_not_stop_others():
    client = MagicMock(ip=ARRAY_IP)
    fans = [{"name": "Fan_0", "appliance_id": "A1", "lifecycle_state": "Healthy"}]

    def hardware(hardware_type):
        if hardware_type == "Node":
            raise RequestError("node listing failed", status=500)
        return fans if hardware_type == "Fan" else []

    client.hardware.side_effect = hardware
    samples = samples_of(HardwareCollector(client, StubCache()))

    assert samples == {"powerstore_hardware_Fan_state": [(labels(name="Fan_0", appliance_id="A1"), 1.0)]}
    assert client.hardware.call_count == 5


def test_ports(array, client):
    array.lists["eth_port"] = [
        {"name": "eth0", "appliance_id": "A1", "is_link_up": True, "current_speed": "25_Gbps"},
        {"name": "eth1", "appliance_id": "A1", "is_link_up": False, "current_speed": None},
        {"name": "eth2", "appliance_id": "A1", "is_link_up": True, "current_speed": "Auto"},
        {"name": "eth3", "appliance_id": "A1", "is_link_up": None, "current_speed": "10_Gbps"},
        {"name": "eth4", "appliance_id": "A1", "current_speed": None},
    ]
    array.fail_paths["fc_port"] = 503
    samples = samples_of(PortCollector(client, StubCache()))

    assert samples["powerstore_eth_port_is_link_up"] == [
        (labels(appliance_id="A1", eth_port_id="eth0"), 1.0),
        (labels(appliance_id="A1", eth_port_id="eth1"), 0.0),
        (labels(appliance_id="A1", eth_port_id="eth2"), 1.0),
    ]
    assert samples["powerstore_eth_port_current_speed"] == [
        (labels(appliance_id="A1", eth_port_id="eth0"), 25.0),
        (labels(appliance_id="A1", eth_port_id="eth1"), 0.0),
        (labels(appliance_id="A1", eth_port_id="eth3"), 10.0),
        (labels(appliance_id="A1", eth_port_id="eth4"), 0.0),
    ]
    assert not any(name.startswith("powerstore_fc_port") for name in samples)


def test_volumes(array, client):
    array.lists["volume_list_cma_view"] = [
        {"name": "db01", "appliance_id": "A1", "state": "Ready", "size": 1073741824, "logical_used": 4096},
        {"name": "db02", "appliance_id": "A2", "state": "Initializing", "size": None},
    ]
    samples = samples_of(VolumeCollector(client, StubCache()))

    assert samples["powerstore_volume_state"] == [
        (labels(name="db01", appliance_id="A1"), 1.0),
        (labels(name="db02", appliance_id="A2"), 0.0),
    ]
    assert samples["powerstore_volume_size"] == [(labels(name="db01", appliance_id="A1"), 1073741824.0)]
    assert samples["powerstore_volume_logical_used"] == [(labels(name="db01", appliance_id="A1"), 4096.0)]


def test_volume_groups_one_sample_per_appliance(array, client):
    array.lists["volume_group_list_cma_view"] = [
        {"name": "vg-db", "appliance_ids": ["A1", "A2"], "logical_provisioned": 100, "logical_used": None},
        {"name": "vg-empty", "appliance_ids": [], "logical_provisioned": 5},
    ]
    samples = samples_of(VolumeGroupCollector(client, StubCache()))

    assert samples == {"powerstore_volumegroup_logical_provisioned": [
        (labels(name="vg-db", appliance_id="A1"), 100.0),
        (labels(name="vg-db", appliance_id="A2"), 100.0),
    ]}


def test_file_systems(array, client):
    array.lists["file_system"] = [
        {"name": "share01", "appliance_id": "A1", "size_total": 2000, "size_used": 500},
        {"name": "share02", "appliance_id": "A1"},
    ]
    samples = samples_of(FileSystemCollector(client, StubCache()))

    assert samples["powerstore_filesystem_size_total"] == [(labels(name="share01", appliance_id="A1"), 2000.0)]
    assert samples["powerstore_filesystem_size_used"] == [(labels(name="share01", appliance_id="A1"), 500.0)]


def test_nas_servers(array, client):
    array.lists["nas_server"] = [
        {"name": "nas01", "operational_status": "Started"},
        {"name": "nas02", "operational_status": "Stopped"},
        {"name": "nas03"},
    ]
    samples = samples_of(NasCollector(client, StubCache()))

    assert samples["powerstore_nas_server_operational_status"] == [
        (labels(name="nas01"), 1.0),
        (labels(name="nas02"), 0.0),
    ]


def test_capacity_label_from_bucket(array, client):
    array.reports[("space_metrics_by_appliance", "A1")] = [
        {"appliance_id": "A1", "last_physical_used": 10},
        {"appliance_id": "A1", "last_physical_used": 20, "last_efficiency_ratio": 4.5, "max_thin_savings": None},
    ]
    cache = StubCache({"appliance": {"A1": "appliance-1"}})
    samples = samples_of(CapacityCollector(client, cache))

    assert samples == {
        "powerstore_cap_last_physical_used": [(labels(appliance_id="A1"), 20.0)],
        "powerstore_cap_last_efficiency_ratio": [(labels(appliance_id="A1"), 4.5)],
    }


def test_appliance_performance_labelled_by_id(array, client):
    array.reports[("performance_metrics_by_appliance", "A1")] = [
        {"appliance_id": "A1", "avg_latency": 310.5, "avg_io_workload_cpu_utilization": 0.12},
    ]
    samples = samples_of(AppliancePerformanceCollector(client, StubCache({"appliance": {"A1": "appliance-1"}})))

    assert samples["powerstore_perf_avg_latency"] == [(labels(appliance_id="A1"), 310.5)]
    assert samples["powerstore_perf_avg_io_workload_cpu_utilization"] == [(labels(appliance_id="A1"), 0.12)]


def test_volume_performance(array, client):
    array.reports[("performance_metrics_by_volume", "v1")] = [
        {"appliance_id": "A1", "avg_read_iops": 1}, {"appliance_id": "A2", "avg_read_iops": 7},
    ]
    array.reports[("performance_metrics_by_volume", "v2")] = []
    cache = StubCache({"volume": {"v1": "db01", "v2": "db02"}})
    samples = samples_of(VolumePerformanceCollector(client, cache))

    assert samples == {"powerstore_metricVolume_avg_read_iops": [(labels(volume_id="db01", appliance_id="A2"), 7.0)]}


def test_volume_group_performance_uses_cached_appliances(array, client):
    array.reports[("performance_metrics_by_vg", "g1")] = [{"avg_total_iops": 42}]
    cache = StubCache({"volume_group": {"g1": "vg-db"}},
                      {"volume_group": {"g1": {"appliance_ids": ["A1", "A2"]}}})
    samples = samples_of(VolumeGroupPerformanceCollector(client, cache))

    assert samples["powerstore_metricVg_avg_total_iops"] == [
        (labels(volume_group_id="vg-db", appliance_id="A1"), 42.0),
        (labels(volume_group_id="vg-db", appliance_id="A2"), 42.0),
    ]


def test_eth_port_performance_help_falls_back_to_field(array, client):
    array.reports[("performance_metrics_by_fe_eth_port", "e1")] = [{"appliance_id": "A1", "avg_bytes_rx_ps": 512}]
    collector = EthPortPerformanceCollector(client, StubCache({"eth_port": {"e1": "eth0"}}))

    families = {family.name: family for family in collector.collect()}
    family = families["powerstore_metricEthPort_avg_bytes_rx_ps"]
    assert family.documentation == "avg_bytes_rx_ps"
    assert dict(family.samples[0].labels) == labels(eth_port_id="eth0", appliance_id="A1")


def test_fc_port_performance(array, client):
    array.reports[("performance_metrics_by_fe_fc_port", "f1")] = [
        {"appliance_id": "A1", "avg_link_failure_count_ps": 0, "avg_total_bandwidth": 1.5e9},
    ]
    samples = samples_of(FcPortPerformanceCollector(client, StubCache({"fc_port": {"f1": "fc0"}})))

    assert samples["powerstore_metricFcPort_avg_link_failure_count_ps"] == [
        (labels(fc_port_id="fc0", appliance_id="A1"), 0.0),
    ]
    assert samples["powerstore_metricFcPort_avg_total_bandwidth"] == [
        (labels(fc_port_id="fc0", appliance_id="A1"), 1.5e9),
    ]


def test_file_system_performance(array, client):
    array.reports[("performance_metrics_by_file_system", "fs1")] = [
        {"appliance_id": "A1", "avg_mirror_overhead_latency": 3, "avg_read_size": 8192},
    ]
    collector = FileSystemPerformanceCollector(client, StubCache({"file_system": {"fs1": "share01"}}))
    samples = samples_of(collector)

    assert samples["powerstore_metricFilesystem_avg_mirror_overhead_latency"] == [
        (labels(name="share01", appliance_id="A1"), 3.0),
    ]
    assert samples["powerstore_metricFilesystem_avg_read_size"] == [
        (labels(name="share01", appliance_id="A1"), 8192.0),
    ]


def test_nas_performance(array, client):
    array.reports[("performance_metrics_by_nas_server", "n1")] = [{"avg_write_size": 4096, "avg_latency": None}]
    samples = samples_of(NasPerformanceCollector(client, StubCache({"nas_server": {"n1": "nas01"}})))

    assert samples == {"powerstore_metricNas_avg_write_size": [(labels(nas_id="nas01"), 4096.0)]}


def test_drive_wear(array, client):
    array.reports[("wear_metrics_by_drive", "d1")] = [{"appliance_id": "A1", "percent_endurance_remaining": 97}]
    array.reports[("wear_metrics_by_drive", "d2")] = [{"appliance_id": "A1"}]
    cache = StubCache({"drive": {"d1": "Drive_0", "d2": "Drive_1"}})
    samples = samples_of(DriveWearCollector(client, cache))

    assert samples == {"powerstore_wear_metrics_by_drive": [(labels(name="Drive_0", appliance_id="A1"), 97.0)]}


def test_report_failure_for_one_id_keeps_others(array, client):
    array.reports[("performance_metrics_by_volume", "v1")] = [{"appliance_id": "A1", "avg_latency": 1}]
    cache = StubCache({"volume": {"v1": "db01", "v404": "gone"}})
    samples = samples_of(VolumePerformanceCollector(client, cache))

    assert samples == {"powerstore_metricVolume_avg_latency": [(labels(volume_id="db01", appliance_id="A1"), 1.0)]}
