# factory_ops/utils/i18n.py

import logging
from typing import Dict

from factory_ops.config import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ("en", "th", "cn")

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "app.name": "CT.ELECTRIC",
        "app.desc": "Factory OS",
        "nav.dashboard": "Dashboard",
        "nav.poDocs": "Create Job Order",
        "nav.qc": "Quality Control (QC)",
        "nav.finishedGoods": "Finished Goods",
        "nav.rawMaterials": "Raw Materials / BOM",
        "nav.purchasing": "Purchasing",
        "inv.title": "Inventory Management",
        "inv.tabFinished": "Finished Goods",
        "inv.tabComponent": "Components",
        "inv.tabRaw": "Raw Materials",
        "inv.search": "Search items...",
        "inv.itemName": "Item Name",
        "inv.inStock": "In Stock",
        "inv.unit": "Unit",
        "inv.updateStock": "Update Stock",
        "doc.number": "Doc No.",
        "doc.customer": "Customer",
        "doc.new": "New Document",
        "doc.approve": "Approve",
        "doc.requirements": "Material Requirements",
        "doc.needed": "Needed",
        "doc.shortage": "Shortage",
        "doc.createPR": "Create Purchase Request",
        "doc.approved": "Approved. Jobs sent to production.",
        "doc.shortageWarning": "Not enough material. Status set to 'Material Checking'.",
        "pur.poNumber": "PO No.",
        "pur.supplier": "Supplier",
        "pur.total": "Total",
        "pur.receive": "Receive Stock",
        "qc.pending": "Waiting for count & QC",
        "qc.toFinished": "To Finished Goods",
        "qc.toComponent": "To Components",
        "set.export": "Export Data",
        "set.import": "Import Data",
        "nav.products": "Products & BOM",
        "nav.production": "Production",
        "nav.maintenance": "Maintenance",
        "nav.warehouse": "Warehouse Map",
        "bom.material": "Material",
        "bom.qtyPerUnit": "Qty / Unit",
        "bom.cost": "Material Cost / Unit",
        "bom.addLine": "Add Line",
        "bom.removeLine": "Remove Line",
        "bom.save": "Save BOM",
        "bom.copy": "Copy BOM",
        "prod.product": "Product",
        "prod.machine": "Machine",
        "prod.produced": "Produced",
        "prod.target": "Target",
        "prod.progress": "Progress",
        "prod.jobs": "Job Progress",
        "prod.logs": "Production Logs",
        "prod.setStep": "Set Step",
        "prod.addOutput": "Record Output",
        "prod.simulate": "Capacity Simulation",
        "prod.machines": "Machines",
        "prod.hoursPerDay": "Hours / Day",
        "prod.targetDays": "Target Days",
        "mc.location": "Location",
        "mc.add": "Add Machine",
        "mc.setStatus": "Change Status",
        "mc.logMaintenance": "Log Maintenance",
        "mc.downtime": "Downtime (h)",
        "wh.zone": "Zone",
        "wh.location": "Location",
        "wh.type": "Type",
        "wh.capacity": "Capacity",
        "wh.usage": "Usage %",
        "wh.add": "Add Location",
        "common.add": "Add",
        "common.search": "Search...",
        "common.status": "Status",
        "common.actions": "Actions",
        "common.unit": "Unit",
        "common.date": "Date",
        "common.quantity": "Quantity",
        "common.save": "Save",
        "common.delete": "Delete",
        "common.refresh": "Refresh",
        "common.loading": "Loading...",
        "common.offline": "Offline mode: changes are saved locally only.",
    },
    "th": {
        "app.name": "CT.ELECTRIC",
        "app.desc": "ระบบบริหารโรงงาน",
        "nav.dashboard": "แดชบอร์ด",
        "nav.poDocs": "ใบสั่งผลิต (Job Order)",
        "nav.qc": "ตรวจสอบคุณภาพ (QC)",
        "nav.finishedGoods": "สินค้าสำเร็จรูป",
        "nav.rawMaterials": "วัตถุดิบ / BOM",
        "nav.purchasing": "จัดซื้อวัตถุดิบ",
        "inv.title": "จัดการสต็อกสินค้า",
        "inv.tabFinished": "สินค้าสำเร็จรูป",
        "inv.tabComponent": "ชิ้นส่วนประกอบ",
        "inv.tabRaw": "วัตถุดิบจัดซื้อ",
        "inv.search": "ค้นหาชื่อรายการ...",
        "inv.itemName": "ชื่อรายการ",
        "inv.inStock": "คงเหลือ",
        "inv.unit": "หน่วยนับ",
        "inv.updateStock": "ปรับปรุงยอดสต็อก",
        "doc.number": "เลขที่เอกสาร",
        "doc.customer": "ลูกค้า",
        "doc.new": "สร้างเอกสารใหม่",
        "doc.approve": "อนุมัติ",
        "doc.requirements": "ความต้องการวัตถุดิบ",
        "doc.needed": "ต้องใช้",
        "doc.shortage": "ขาด",
        "doc.createPR": "สร้างใบขอซื้อ (PR)",
        "doc.approved": "อนุมัติสำเร็จ! ส่งข้อมูลไปยังฝ่ายผลิตแล้ว",
        "doc.shortageWarning": "แจ้งเตือน: วัตถุดิบไม่พอสำหรับการผลิต สถานะเปลี่ยนเป็น 'Material Checking'",
        "pur.poNumber": "เลขที่ PO",
        "pur.supplier": "ผู้จำหน่าย",
        "pur.total": "ยอดรวม",
        "pur.receive": "รับสินค้าเข้าสต็อก",
        "qc.pending": "รอนับ & QC",
        "qc.toFinished": "เข้าคลังสินค้าสำเร็จรูป",
        "qc.toComponent": "เข้าคลังชิ้นส่วน (รอประกอบ)",
        "set.export": "ส่งออกข้อมูล (Backup)",
        "set.import": "นำเข้าข้อมูล (Restore)",
        "nav.products": "สินค้าและสูตรการผลิต",
        "nav.production": "การผลิต",
        "nav.maintenance": "ซ่อมบำรุง",
        "nav.warehouse": "แผนผังคลังสินค้า",
        "bom.material": "วัตถุดิบ",
        "bom.qtyPerUnit": "ปริมาณต่อหน่วย",
        "bom.cost": "ต้นทุนวัตถุดิบต่อหน่วย",
        "bom.addLine": "เพิ่มรายการ",
        "bom.removeLine": "ลบรายการ",
        "bom.save": "บันทึกสูตร",
        "bom.copy": "คัดลอกสูตร",
        "prod.product": "สินค้า",
        "prod.machine": "เครื่องจักร",
        "prod.produced": "ผลิตได้",
        "prod.target": "เป้าหมาย",
        "prod.progress": "ความคืบหน้า",
        "prod.jobs": "ความคืบหน้างาน",
        "prod.logs": "บันทึกการผลิต",
        "prod.setStep": "เปลี่ยนขั้นตอน",
        "prod.addOutput": "บันทึกยอดผลิต",
        "prod.simulate": "จำลองกำลังการผลิต",
        "prod.machines": "จำนวนเครื่อง",
        "prod.hoursPerDay": "ชั่วโมง / วัน",
        "prod.targetDays": "จำนวนวันเป้าหมาย",
        "mc.location": "ตำแหน่ง",
        "mc.add": "เพิ่มเครื่องจักร",
        "mc.setStatus": "เปลี่ยนสถานะ",
        "mc.logMaintenance": "บันทึกการซ่อม",
        "mc.downtime": "เวลาหยุดเครื่อง (ชม.)",
        "wh.zone": "โซน",
        "wh.location": "ตำแหน่ง",
        "wh.type": "ประเภท",
        "wh.capacity": "ความจุ",
        "wh.usage": "การใช้งาน %",
        "wh.add": "เพิ่มตำแหน่ง",
        "common.add": "เพิ่ม",
        "common.search": "ค้นหา...",
        "common.status": "สถานะ",
        "common.actions": "จัดการ",
        "common.unit": "หน่วย",
        "common.date": "วันที่",
        "common.quantity": "จำนวน",
        "common.save": "บันทึก",
        "common.delete": "ลบ",
        "common.refresh": "รีเฟรช",
        "common.loading": "กำลังโหลด...",
        "common.offline": "โหมดออฟไลน์: บันทึกข้อมูลไว้ในเครื่องเท่านั้น",
    },
    "cn": {
        "app.name": "CT.ELECTRIC",
        "app.desc": "工厂管理系统",
        "nav.dashboard": "仪表盘",
        "nav.poDocs": "生产工单 (Job Order)",
        "nav.qc": "质量控制 (QC)",
        "nav.finishedGoods": "成品库存",
        "nav.rawMaterials": "原材料 / BOM",
        "nav.purchasing": "采购管理",
        "inv.title": "库存管理",
        "inv.tabFinished": "成品",
        "inv.tabComponent": "组件",
        "inv.tabRaw": "原材料",
        "inv.search": "搜索物品...",
        "inv.itemName": "物品名称",
        "inv.inStock": "库存量",
        "inv.unit": "单位",
        "inv.updateStock": "更新库存",
        "doc.number": "单号",
        "doc.customer": "客户",
        "doc.new": "新建单据",
        "doc.approve": "批准",
        "doc.requirements": "物料需求",
        "doc.needed": "需求量",
        "doc.shortage": "短缺",
        "doc.createPR": "创建采购申请",
        "doc.approved": "已批准，任务已发送至生产部。",
        "doc.shortageWarning": "物料不足，状态已改为 'Material Checking'。",
        "pur.poNumber": "采购单号",
        "pur.supplier": "供应商",
        "pur.total": "合计",
        "pur.receive": "收货入库",
        "qc.pending": "待点数和质检",
        "qc.toFinished": "入成品库",
        "qc.toComponent": "入组件库",
        "set.export": "导出数据",
        "set.import": "导入数据",
        "nav.products": "产品与物料清单",
        "nav.production": "生产",
        "nav.maintenance": "维护",
        "nav.warehouse": "仓库地图",
        "bom.material": "物料",
        "bom.qtyPerUnit": "单位用量",
        "bom.cost": "单位物料成本",
        "bom.addLine": "添加行",
        "bom.removeLine": "删除行",
        "bom.save": "保存清单",
        "bom.copy": "复制清单",
        "prod.product": "产品",
        "prod.machine": "机器",
        "prod.produced": "已生产",
        "prod.target": "目标",
        "prod.progress": "进度",
        "prod.jobs": "工单进度",
        "prod.logs": "生产记录",
        "prod.setStep": "设置工序",
        "prod.addOutput": "记录产量",
        "prod.simulate": "产能模拟",
        "prod.machines": "机器数量",
        "prod.hoursPerDay": "每天小时数",
        "prod.targetDays": "目标天数",
        "mc.location": "位置",
        "mc.add": "添加机器",
        "mc.setStatus": "更改状态",
        "mc.logMaintenance": "记录维护",
        "mc.downtime": "停机时间 (小时)",
        "wh.zone": "区域",
        "wh.location": "库位",
        "wh.type": "类型",
        "wh.capacity": "容量",
        "wh.usage": "使用率 %",
        "wh.add": "添加库位",
        "common.add": "添加",
        "common.search": "搜索...",
        "common.status": "状态",
        "common.actions": "操作",
        "common.unit": "单位",
        "common.date": "日期",
        "common.quantity": "数量",
        "common.save": "保存",
        "common.delete": "删除",
        "common.refresh": "刷新",
        "common.loading": "加载中...",
        "common.offline": "离线模式：更改仅保存在本地。",
    },
}


class Translator:
    def __init__(self, language: str = DEFAULT_LANGUAGE):
        self.language = DEFAULT_LANGUAGE
        self.set_language(language)

    def set_language(self, language: str):
        if language not in SUPPORTED_LANGUAGES:
            logger.warning(f"Unsupported language '{language}', keeping '{self.language}'.")
            return
        self.language = language

    def t(self, key: str) -> str:
        """Translated text, or the key itself when there is no entry."""
        return TRANSLATIONS.get(self.language, {}).get(key, key)
