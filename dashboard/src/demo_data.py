"""
Static demo customers shown when the hosted database is unavailable.

CHANGELOG:
- 2026-10-13: Initial creation (STORY-008)
"""

from dashboard.src.models import Customer

DEMO_CUSTOMERS: tuple[Customer, ...] = (
    Customer(
        id="demo-001",
        company_name="上海临港新能源科技有限公司",
        province="上海市",
        city="上海",
        capacity_mw=12.5,
        demand_type="光伏",
        industry="装备制造",
        contact="王建国",
        phone="13812345678",
    ),
    Customer(
        id="demo-002",
        company_name="苏州工业园区储能运营有限公司",
        province="江苏省",
        city="苏州",
        capacity_mw=8.0,
        demand_type="储能",
        industry="园区运营",
        contact="李敏",
        phone="13923456789",
    ),
    Customer(
        id="demo-003",
        company_name="杭州城西充电服务有限公司",
        province="浙江省",
        city="杭州",
        capacity_mw=3.2,
        demand_type="充电桩",
        industry="交通运输",
        contact="陈晓东",
        phone="13734567890",
    ),
    Customer(
        id="demo-004",
        company_name="深圳南山数据中心",
        province="广东省",
        city="深圳",
        capacity_mw=6.8,
        demand_type="其他-需求响应",
        industry="信息技术",
        contact="赵磊",
        phone="13645678901",
    ),
    Customer(
        id="demo-005",
        company_name="上海浦东冷链物流有限公司",
        province="上海市",
        city="上海",
        capacity_mw=4.5,
        demand_type="储能",
        industry="物流仓储",
        contact="周婷",
        phone="13556789012",
    ),
    Customer(
        id="demo-006",
        company_name="广州番禺汽车零部件有限公司",
        province="广东省",
        city="广州",
        capacity_mw=9.6,
        demand_type="光伏",
        industry="汽车制造",
        contact="吴刚",
        phone="13467890123",
    ),
    Customer(
        id="demo-007",
        company_name="南京江宁商业综合体",
        province="江苏省",
        city="南京",
        capacity_mw=2.4,
        demand_type="其他",
        industry="商业地产",
        contact="郑丽",
        phone="13378901234",
    ),
    Customer(
        id="demo-008",
        company_name="杭州钱塘光伏电力有限公司",
        province="浙江省",
        city="杭州",
        capacity_mw=7.1,
        demand_type="光伏",
        industry="电力",
        contact="孙浩",
        phone="13289012345",
    ),
    Customer(
        id="demo-009",
        company_name="深圳前海公交充电站",
        province="广东省",
        city="深圳",
        capacity_mw=5.0,
        demand_type="充电桩",
        industry="公共交通",
        contact="钱勇",
        phone="13190123456",
    ),
    Customer(
        id="demo-010",
        company_name="成都高新储能示范项目",
        province="四川省",
        city="成都",
        capacity_mw=10.0,
        demand_type="储能",
        industry="能源服务",
        contact="冯雪",
        phone="13001234567",
    ),
)
