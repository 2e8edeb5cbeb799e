"""
Assistant Prompts - 提示词构建

提示词使用越南语（前端面向越南语用户），输出格式由 JSON Schema 约束。
症状日志的 timestamp 可能是毫秒时间戳或 ISO 字符串。
"""

from datetime import UTC, datetime
from typing import Any

UNKNOWN = "không rõ"

NOT_ENOUGH_DATA_MESSAGE = (
    "Chưa đủ dữ liệu để phân tích. Hãy ghi lại thêm các triệu chứng của bạn, "
    "bao gồm cả những ngày bạn cảm thấy khỏe (mức đau = 0)."
)


def _field(profile: dict[str, Any], key: str) -> str:
    value = profile.get(key)
    if value is None or value == "":
        return UNKNOWN
    if isinstance(value, list):
        return ", ".join(str(item) for item in value) or UNKNOWN
    return str(value)


def _parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        try:
            return datetime.fromtimestamp(value / 1000, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def format_datetime(value: Any) -> str:
    parsed = _parse_timestamp(value)
    return parsed.strftime("%d/%m/%Y %H:%M") if parsed else UNKNOWN


def format_date(value: Any) -> str:
    parsed = _parse_timestamp(value)
    return parsed.strftime("%d/%m/%Y") if parsed else UNKNOWN


def _pain_level(symptom: dict[str, Any]) -> float:
    try:
        return float(symptom.get("painLevel") or 0)
    except (TypeError, ValueError):
        return 0.0


def symptom_history(symptoms: list[dict[str, Any]]) -> str:
    """饮食计划使用的简要症状历史"""
    lines = [
        f"- Lúc {format_datetime(s.get('timestamp'))}: đã ăn '{s.get('eatenFoods', UNKNOWN)}', "
        f"đau mức {s.get('painLevel', 0)}/10 ở {s.get('painLocation', UNKNOWN)}."
        for s in symptoms
    ]
    return "\n".join(lines) or "Chưa có lịch sử triệu chứng."


def health_journal(symptoms: list[dict[str, Any]]) -> str:
    """诱因分析使用的逐日记录，区分有痛和无痛的日子"""
    lines = []
    for s in symptoms:
        activity = s.get("physicalActivity")
        activity_text = f'Vận động: "{activity}"' if activity else "Không vận động"
        if _pain_level(s) > 0:
            outcome = f"Đau mức {s.get('painLevel')}/10 ở {s.get('painLocation', UNKNOWN)}"
        else:
            outcome = "Không đau"
        lines.append(
            f"- Ngày {format_date(s.get('timestamp'))}: ăn \"{s.get('eatenFoods', UNKNOWN)}\". "
            f"{activity_text}. Kết quả: {outcome}."
        )
    return "\n".join(lines)


def build_meal_plan_prompt(profile: dict[str, Any], symptoms: list[dict[str, Any]]) -> str:
    return f"""
Hãy lập thực đơn chi tiết cho 7 ngày tới, dựa trên hồ sơ sức khỏe tiêu hóa của người dùng.

HỒ SƠ NGƯỜI DÙNG:
- Bệnh lý: {_field(profile, "condition")}
- Mức đau hiện tại: {_field(profile, "painLevel")}/10
- Thực phẩm đã biết gây kích ứng: {_field(profile, "triggerFoods")}
- Mục tiêu ăn uống: {_field(profile, "dietaryGoal")}

LỊCH SỬ TRIỆU CHỨNG GẦN ĐÂY:
{symptom_history(symptoms)}

YÊU CẦU:
- Mỗi ngày gồm 3 bữa chính (sáng, trưa, tối) và 2 bữa phụ.
- Món ăn dễ tiêu, phù hợp với bệnh lý và mục tiêu của người dùng.
- Loại bỏ hoàn toàn các thực phẩm gây kích ứng đã biết.
- Mỗi món ghi rõ tên, giờ ăn gợi ý, khẩu phần hợp lý và một ghi chú ngắn vì sao món đó tốt cho người dùng.
- Thực đơn đa dạng và đủ dinh dưỡng.
""".strip()


def build_check_food_prompt(profile: dict[str, Any], food_name: str) -> str:
    return f"""
Đánh giá thực phẩm sau cho người dùng có hồ sơ sức khỏe:
- Bệnh lý: {_field(profile, "condition")}
- Thực phẩm đã biết gây kích ứng: {_field(profile, "triggerFoods")}

Thực phẩm cần kiểm tra: "{food_name}"

YÊU CẦU:
1. Xếp mức độ an toàn vào một trong ba cấp: "An toàn", "Hạn chế", "Tránh".
2. Giải thích ngắn gọn lý do.
3. Nêu dẫn chứng khoa học ngắn gọn, kèm nguồn nếu có; nếu không có nguồn cụ thể thì dựa trên nguyên tắc dinh dưỡng chung.
""".strip()


def build_analyze_triggers_prompt(profile: dict[str, Any], symptoms: list[dict[str, Any]]) -> str:
    return f"""
Phân tích so sánh hồ sơ và nhật ký sức khỏe dưới đây để tìm các yếu tố ảnh hưởng đến tình trạng của người dùng.

HỒ SƠ NGƯỜI DÙNG:
- Bệnh lý: {_field(profile, "condition")}
- Thực phẩm đã biết gây kích ứng: {_field(profile, "triggerFoods")}

NHẬT KÝ SỨC KHỎE:
{health_journal(symptoms)}

YÊU CẦU PHÂN TÍCH:
1. **Tác nhân gây đau:** món ăn, đồ uống hoặc hoạt động thường xuất hiện trước những lần đau (mức đau > 0), kèm giả thuyết về "thủ phạm".
2. **Yếu tố tích cực:** món ăn, đồ uống hoặc hoạt động thường gặp vào những ngày không đau (mức đau = 0).
3. **So sánh và đề xuất**, chia thành ba mục:
   - **NÊN TRÁNH**
   - **NÊN DUY TRÌ**
   - **NÊN THỬ BỔ SUNG**

Trình bày thành báo cáo rõ ràng bằng markdown, tiêu đề in đậm.
""".strip()


def build_suggest_recipe_prompt(profile: dict[str, Any], request: str) -> str:
    return f"""
Với vai trò chuyên gia dinh dưỡng cho người bệnh dạ dày, hãy tạo một công thức nấu ăn mới theo yêu cầu và hồ sơ sức khỏe của người dùng.

HỒ SƠ NGƯỜI DÙNG:
- Bệnh lý: {_field(profile, "condition")}
- Thực phẩm đã biết gây kích ứng: {_field(profile, "triggerFoods")}
- Mục tiêu ăn uống: {_field(profile, "dietaryGoal")}

YÊU CẦU CỦA NGƯỜI DÙNG:
"{request}"

YÊU CẦU VỀ CÔNG THỨC:
- An toàn tuyệt đối, dễ tiêu hóa, tránh mọi thực phẩm gây kích ứng đã biết.
- Gồm tên món (title), mô tả ngắn (description), thời gian nấu (cookTime), nguyên liệu (ingredients) và hướng dẫn chi tiết (instructions).
""".strip()
