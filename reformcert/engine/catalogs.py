"""
catalogs.py — Standard unit-price tables for renovation works.

One immutable table per Category, transcribed from the official standard
unit-price tables. Codes are only unique WITHIN a category.

Catalogs are injected, not imported as globals:
    catalogs = load_catalogs()                     # once per process (cached)
    catalogs.lookup(Category.energy, "es_solar_power")

Routes receive the CatalogSet through the get_catalogs() FastAPI dependency so
tests can substitute fixture catalogs via app.dependency_overrides.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Iterator, List, Tuple

from reformcert.engine.errors import UnknownWorkTypeError
from reformcert.engine.schemas import Category, WorkTypeDefinition

logger = logging.getLogger(__name__)

# Energy sub-category whose presence raises the energy / long-term caps
SOLAR_POWER_SUB_CATEGORY = "太陽光発電"


def _wt(code: str, name: str, category: str, unit_price, unit: str, description: str = "", **extra) -> WorkTypeDefinition:
    return WorkTypeDefinition(
        code=code,
        name=name,
        category=category,
        unit_price=unit_price,
        unit=unit,
        description=description or name,
        **extra,
    )


# ===========================================================================
# SEISMIC: 耐震改修
# ===========================================================================

SEISMIC_WORK_TYPES: Tuple[WorkTypeDefinition, ...] = (
    _wt("seismic_wood_foundation", "木造住宅：基礎に係る耐震改修", "木造住宅", 15_400, "㎡", "当該家屋の建築面積（㎡）"),
    _wt("seismic_wood_wall", "木造住宅：壁に係る耐震改修", "木造住宅", 22_500, "㎡", "当該家屋の床面積（㎡）"),
    _wt("seismic_wood_roof", "木造住宅：屋根に係る耐震改修", "木造住宅", 19_300, "㎡", "当該耐震改修の施工面積（㎡）"),
    _wt("seismic_wood_other", "木造住宅：基礎、壁又は屋根に係るもの以外の耐震改修", "木造住宅", 33_000, "㎡", "当該家屋の床面積（㎡）"),
    _wt("seismic_nonwood_wall", "木造住宅以外：壁に係る耐震改修", "木造住宅以外", 75_500, "㎡", "当該家屋の床面積（㎡）"),
    _wt("seismic_nonwood_column_wrap", "木造住宅以外：柱に係る耐震改修（柱巻補強工事）", "木造住宅以外", 1_434_500, "箇所", "鉄板その他の補強材を柱に巻きつける工事の箇所数"),
    _wt("seismic_nonwood_column_other", "木造住宅以外：柱に係る耐震改修（柱巻補強工事以外）", "木造住宅以外", 33_100, "箇所", "当該耐震改修の箇所数"),
    _wt("seismic_nonwood_seismic_isolation", "木造住宅以外：免震工事", "木造住宅以外", 591_500, "箇所", "当該耐震改修の箇所数"),
    _wt("seismic_nonwood_other", "木造住宅以外：壁若しくは柱に係るもの又は免震工事以外の耐震改修", "木造住宅以外", 20_700, "㎡", "当該家屋の床面積（㎡）"),
)


# ===========================================================================
# BARRIER-FREE: バリアフリー改修
# ===========================================================================

BARRIER_FREE_WORK_TYPES: Tuple[WorkTypeDefinition, ...] = (
    _wt("bf_passage_expansion", "通路の幅を拡張するもの", "通路・出入口拡幅", 166_100, "㎡"),
    _wt("bf_doorway_expansion", "出入り口の幅を拡張するもの", "通路・出入口拡幅", 189_200, "箇所"),
    _wt("bf_stair_gradient", "階段の設置又は改良によりその勾配を緩和する工事", "階段", 585_000, "箇所"),
    _wt("bf_bathroom_area_increase", "入浴又はその介助を容易に行うために浴室の床面積を増加させる工事", "浴室", 471_700, "㎡"),
    _wt("bf_bathtub_low_height", "浴槽をまたぎの高さの低いものに取り替える工事", "浴室", 529_100, "箇所"),
    _wt("bf_bathtub_transfer_equipment", "固定式の移乗台、踏み台その他の高齢者等の浴槽の出入りを容易にする設備を設置する工事", "浴室", 27_700, "箇所"),
    _wt("bf_bathroom_faucet", "高齢者等の身体の洗浄を容易にする水栓器具を設置し又は同器具に取り替える工事", "浴室", 56_900, "箇所"),
    _wt("bf_toilet_area_increase", "排泄又はその介助を容易に行うために便所の床面積を増加させる工事", "便所", 260_600, "㎡"),
    _wt("bf_toilet_western_style", "便器を座便式のものに取り替える工事", "便所", 359_700, "箇所"),
    _wt("bf_toilet_seat_height", "座便式の便器の座高を高くする工事", "便所", 298_900, "箇所"),
    _wt("bf_handrail_long", "長さが150㎝以上の手すりを取り付けるもの", "手すり", 19_600, "m"),
    _wt("bf_handrail_short", "長さが150㎝未満の手すりを取り付けるもの", "手すり", 32_800, "箇所"),
    _wt("bf_step_entrance", "玄関等段差解消等工事", "段差解消", 43_900, "箇所"),
    _wt("bf_step_bathroom", "浴室段差解消等工事", "段差解消", 96_000, "㎡"),
    _wt("bf_step_other", "玄関等段差解消等工事及び浴室段差解消等工事以外のもの", "段差解消", 35_100, "㎡"),
    _wt("bf_door_sliding", "開戸を引戸、折戸等に取り替える工事", "戸の改良", 149_700, "箇所"),
    _wt("bf_door_lever", "開戸のドアノブをレバーハンドル等に取り替える工事", "戸の改良", 13_800, "箇所"),
    _wt("bf_door_power", "戸に開閉のための動力装置を設置する工事", "戸の改良", 447_500, "箇所"),
    _wt("bf_door_hanging", "戸を吊戸方式に変更する工事", "戸の改良", 134_600, "箇所"),
    _wt("bf_door_other", "戸に戸車を設置する工事その他", "戸の改良", 26_400, "箇所"),
    _wt("bf_floor_material", "床の材料を滑りにくいものに取り替える工事", "床材", 19_800, "㎡"),
)


# ===========================================================================
# ENERGY: 省エネ改修
# ===========================================================================

_WINDOW_AREA = "家屋の床面積の合計 × 窓面積割合"
_MODULE_OUTPUT = "太陽電池モジュールの出力数"

ENERGY_WORK_TYPES: Tuple[WorkTypeDefinition, ...] = (
    # 窓
    _wt("es_glass_all_regions", "ガラスの交換（1から8地域まで）", "窓", 6_300, "㎡", _WINDOW_AREA, needs_window_ratio=True),
    _wt("es_inner_window_123", "内窓の新設又は交換（1，2及び3地域）", "窓", 11_300, "㎡", _WINDOW_AREA, region_code="1-3", needs_window_ratio=True),
    _wt("es_inner_window_467", "内窓の新設（4，5，6及び7地域）", "窓", 8_100, "㎡", _WINDOW_AREA, region_code="4-7", needs_window_ratio=True),
    _wt("es_sash_glass_1234", "サッシ及びガラスの交換（1，2，3及び4地域）", "窓", 19_000, "㎡", _WINDOW_AREA, region_code="1-4", needs_window_ratio=True),
    _wt("es_sash_glass_567", "サッシ及びガラスの交換（5，6及び7地域）", "窓", 15_000, "㎡", _WINDOW_AREA, region_code="5-7", needs_window_ratio=True),
    # 断熱
    _wt("es_ceiling_insulation", "天井等の断熱性を高める工事（1から8地域まで）", "断熱", 2_700, "㎡", "当該工事に係る部分の床面積の合計"),
    _wt("es_wall_insulation", "壁の断熱性を高める工事（1から8地域まで）", "断熱", 19_400, "㎡", "当該工事に係る部分の床面積の合計"),
    _wt("es_floor_insulation_123", "床等の断熱性を高める工事（1，2及び3地域）", "断熱", 5_800, "㎡", "当該工事に係る部分の床面積の合計", region_code="1-3"),
    _wt("es_floor_insulation_4567", "床等の断熱性を高める工事（4，5，6及び7地域）", "断熱", 4_600, "㎡", "当該工事に係る部分の床面積の合計", region_code="4-7"),
    # 設備
    _wt("es_solar_heat_cooling", "太陽熱利用冷温熱装置（冷暖房等及び給湯の用）", "設備", 151_600, "㎡", "集熱器面積"),
    _wt("es_solar_heat_water", "太陽熱利用冷温熱装置（給湯の用）", "設備", 365_400, "台", "台数"),
    _wt("es_latent_heat_recovery", "潜熱回収型給湯器", "設備", 49_700, "台", "台数"),
    _wt("es_heat_pump_water_heater", "ヒートポンプ式電気給湯器", "設備", 412_200, "台", "台数"),
    _wt("es_fuel_cell", "燃料電池コージェネレーションシステム", "設備", 789_800, "台", "台数"),
    _wt("es_air_conditioner", "エアコンディショナー", "設備", 134_400, "台", "台数"),
    # 太陽光発電
    _wt("es_solar_power", "太陽光発電設備の設置工事", SOLAR_POWER_SUB_CATEGORY, 425_500, "kW", _MODULE_OUTPUT),
    _wt("es_solar_safety", "特殊工事：安全対策工事", SOLAR_POWER_SUB_CATEGORY, 37_600, "kW", _MODULE_OUTPUT),
    _wt("es_solar_waterproof", "特殊工事：陸屋根防水基礎工事", SOLAR_POWER_SUB_CATEGORY, 55_500, "kW", _MODULE_OUTPUT),
    _wt("es_solar_snow", "特殊工事：積雪対策工事", SOLAR_POWER_SUB_CATEGORY, 27_800, "kW", _MODULE_OUTPUT),
    _wt("es_solar_salt", "特殊工事：塩害対策工事", SOLAR_POWER_SUB_CATEGORY, 9_000, "kW", _MODULE_OUTPUT),
    _wt("es_solar_power_line", "特殊工事：幹線増強工事", SOLAR_POWER_SUB_CATEGORY, 106_800, "件", "件数"),
)


# ===========================================================================
# COHABITATION: 同居対応改修
# ===========================================================================

COHABITATION_WORK_TYPES: Tuple[WorkTypeDefinition, ...] = (
    _wt("cohab_kitchen", "台所の設置工事", "台所", 476_100, "箇所", "調理のために使用する流し又は加熱調理器を設置する工事"),
    _wt("cohab_bathroom", "浴室の設置工事", "浴室", 1_283_400, "箇所"),
    _wt("cohab_toilet", "便所の設置工事", "便所", 476_100, "箇所"),
    _wt("cohab_entrance", "玄関の設置工事", "玄関", 476_100, "箇所"),
    _wt("cohab_water_supply_general", "給水のための設備（一般的な場合）", "給排水設備", 193_300, "箇所"),
    _wt("cohab_water_supply_difficult", "給水のための設備（工事が困難な場合）", "給排水設備", 514_200, "箇所"),
    _wt("cohab_drainage_general", "排水のための設備（一般的な場合）", "給排水設備", 148_900, "箇所"),
    _wt("cohab_drainage_difficult", "排水のための設備（工事が困難な場合）", "給排水設備", 1_622_000, "箇所"),
)


# ===========================================================================
# CHILDCARE: 子育て対応改修
# ===========================================================================

_ACCIDENT = "子どもの事故を防止するための工事"
_SECURITY = "開口部の防犯性を高める工事"
_SOUNDPROOF = "開口部・界壁・界床の防音性を高める工事"
_LAYOUT = "間取り変更工事"

CHILDCARE_WORK_TYPES: Tuple[WorkTypeDefinition, ...] = (
    _wt("childcare_round_corner", "壁又は柱の出隅を丸みのあるものに改良する工事", _ACCIDENT, 11_000, "箇所"),
    _wt("childcare_cushion_floor", "床をクッションフロアに取り替える工事", _ACCIDENT, 7_000, "㎡"),
    _wt("childcare_shock_absorbing_tatami", "衝撃緩和型畳床に取り替える工事", _ACCIDENT, 8_300, "㎡"),
    _wt("childcare_balcony_railing", "バルコニーの手すり子の取付工事", _ACCIDENT, 13_500, "m"),
    _wt("childcare_window_railing", "二階以上の窓の手すりの取付工事", _ACCIDENT, 20_300, "箇所"),
    _wt("childcare_corridor_stair_handrail", "廊下又は階段の手すりの取付工事", _ACCIDENT, 36_300, "m"),
    _wt("childcare_door_finger_guard", "室内ドアの指の挟み込み防止措置工事", _ACCIDENT, 104_500, "箇所"),
    _wt("childcare_child_fence_prefab", "チャイルドフェンスの設置工事（既製品の取付け）", _ACCIDENT, 15_000, "箇所"),
    _wt("childcare_child_fence_custom", "チャイルドフェンスの設置工事（造作工事）", _ACCIDENT, 115_000, "箇所"),
    _wt("childcare_shutter_outlet", "シャッター付きコンセントへの取替工事", _ACCIDENT, 4_000, "箇所"),
    _wt("childcare_outlet_height_change", "コンセントの高さの変更工事", _ACCIDENT, 7_100, "箇所"),
    _wt("childcare_open_kitchen", "対面式キッチンへの交換工事", "対面式キッチンへの交換工事", 1_477_200, "箇所"),
    _wt("childcare_security_door", "防犯性のある玄関ドアへの取替工事", _SECURITY, 396_500, "箇所"),
    _wt("childcare_security_sash_glass", "防犯性のあるサッシ及びガラスへの取替工事", _SECURITY, 57_400, "㎡"),
    _wt("childcare_security_grille", "面格子の取付工事", _SECURITY, 55_400, "箇所"),
    _wt("childcare_storage_addition", "棚等の収納設備を増設する工事", "収納設備を増設する工事", 163_900, "㎡"),
    _wt("childcare_soundproof_window", "窓の防音性を高める工事", _SOUNDPROOF, 52_400, "㎡"),
    _wt("childcare_soundproof_party_wall", "界壁の防音性を高める工事", _SOUNDPROOF, 17_400, "㎡"),
    _wt("childcare_soundproof_party_floor", "界床の防音性を高める工事", _SOUNDPROOF, 39_900, "㎡"),
    _wt("childcare_partition_only", "間仕切壁の設置又は解体のみを行う工事", _LAYOUT, 159_400, "箇所"),
    _wt("childcare_partition_with_renovation", "間仕切壁の設置又は解体以外の修繕又は模様替えを行う工事", _LAYOUT, 26_800, "㎡"),
    _wt("childcare_kitchen_relocation", "上記に伴う調理室の位置の変更", _LAYOUT, 1_346_900, "式"),
    _wt("childcare_bathroom_relocation", "上記に伴う浴室の位置の変更", _LAYOUT, 971_100, "式"),
    _wt("childcare_toilet_relocation", "上記に伴う便所の位置の変更", _LAYOUT, 402_100, "式"),
    _wt("childcare_washroom_relocation", "上記に伴う洗面所の位置の変更", _LAYOUT, 481_200, "式"),
)


# ===========================================================================
# OTHER RENOVATION: その他増改築等 (direct entry, no unit price)
# ===========================================================================

OTHER_RENOVATION_WORK_TYPES: Tuple[WorkTypeDefinition, ...] = (
    _wt("other_large_repair", "大規模な修繕", "その他増改築等", None, "式", "家屋の主要構造部の一つ以上について行う大規模な修繕"),
    _wt("other_large_remodel", "大規模な模様替え", "その他増改築等", None, "式", "家屋の主要構造部の一つ以上について行う大規模な模様替え"),
    _wt("other_extension", "増築", "その他増改築等", None, "式", "家屋の床面積を増加させる増築工事"),
    _wt("other_renovation", "その他の増改築", "その他増改築等", None, "式", "その他の増改築等の工事"),
    _wt("other_durability", "耐久性向上改修", "その他増改築等", None, "式", "家屋の耐久性を向上させる改修工事"),
    _wt("other_energy_custom", "省エネ性能向上改修（標準単価以外）", "その他増改築等", None, "式", "標準単価法以外による省エネルギー性能向上のための改修工事"),
)


# ===========================================================================
# LONG-TERM HOUSING: 長期優良住宅化改修
# ===========================================================================

_ATTIC_VENT = "小屋裏の換気工事"
_BATH_WATERPROOF = "浴室又は脱衣室の防水工事"
_SILL = "土台の防腐・防蟻工事"
_UNDERFLOOR = "床下の防湿工事"
_GROUND = "地盤の防蟻工事"
_PIPES = "給水管・給湯管又は排水管の維持管理又は更新の容易化工事"

LONG_TERM_HOUSING_WORK_TYPES: Tuple[WorkTypeDefinition, ...] = (
    _wt("lth_attic_wall_vent", "小屋裏壁の換気口取付工事", _ATTIC_VENT, 20_900, "箇所"),
    _wt("lth_eave_vent", "軒裏換気口取付工事（有孔ボード以外）", _ATTIC_VENT, 7_800, "箇所"),
    _wt("lth_eave_perforated_board", "軒裏有孔ボード取付工事", _ATTIC_VENT, 5_900, "㎡"),
    _wt("lth_attic_ridge_vent", "小屋裏頂部排気口取付工事", _ATTIC_VENT, 47_400, "箇所"),
    _wt("lth_attic_inspection_hatch", "小屋裏点検口の取付工事", "小屋裏点検口の取付工事", 18_300, "箇所"),
    _wt("lth_exterior_wall_ventilation", "外壁通気構造等工事", "外壁の通気構造等工事", 14_200, "㎡"),
    _wt("lth_bathroom_unit_bath", "浴室のユニットバス化", _BATH_WATERPROOF, 896_900, "箇所"),
    _wt("lth_dressing_wall_waterproof_other", "脱衣室の壁の防水措置（ビニルクロス以外）", _BATH_WATERPROOF, 12_800, "㎡"),
    _wt("lth_dressing_wall_waterproof_vinyl", "脱衣室の壁の防水措置（ビニルクロス）", _BATH_WATERPROOF, 5_400, "㎡"),
    _wt("lth_dressing_floor_waterproof_other", "脱衣室の床の防水措置（耐水フローリング以外）", _BATH_WATERPROOF, 6_600, "㎡"),
    _wt("lth_dressing_floor_waterproof_flooring", "脱衣室の床の防水措置（耐水フローリング）", _BATH_WATERPROOF, 12_000, "㎡"),
    _wt("lth_sill_preservative_termite", "土台の防腐・防蟻処理", _SILL, 2_100, "㎡"),
    _wt("lth_sill_water_cut", "土台の水切り取付工事", _SILL, 2_400, "m"),
    _wt("lth_wall_frame_preservative_termite", "外壁の軸組等の防腐・防蟻処理", "外壁の軸組等の防腐・防蟻工事", 2_100, "㎡"),
    _wt("lth_underfloor_concrete", "床下のコンクリート打設", _UNDERFLOOR, 12_700, "㎡"),
    _wt("lth_underfloor_moisture_film", "床下の防湿フィルム敷設", _UNDERFLOOR, 1_300, "㎡"),
    _wt("lth_underfloor_inspection_hatch", "床下点検口の取付工事", "床下点検口の取付工事", 27_800, "箇所"),
    _wt("lth_rain_gutter", "雨どいの取付工事", "雨どいの取付工事", 3_900, "㎡(屋根の水平投影面積)"),
    _wt("lth_soil_termite_treatment", "土壌への防蟻処理", _GROUND, 3_100, "㎡"),
    _wt("lth_ground_concrete", "地盤のコンクリート打設", _GROUND, 12_700, "㎡"),
    _wt("lth_private_water_pipe_replacement", "専用給水湯管の取替工事", _PIPES, 9_500, "m"),
    _wt("lth_common_water_pipe_replacement", "共用給水管の取替工事", _PIPES, 22_600, "m"),
    _wt("lth_detached_drain_pipe_replacement", "戸建住宅排水管の取替工事", _PIPES, 9_800, "m"),
    _wt("lth_common_drain_pipe_replacement", "共用排水管の取替工事（共用部）", _PIPES, 16_800, "m"),
    _wt("lth_private_drain_pipe_no_other", "専用排水管の取替工事（他の住戸に配管がないもの）", _PIPES, 15_600, "m"),
    _wt("lth_private_drain_pipe_with_other", "専用排水管の取替工事（他の住戸に配管があるもの）", _PIPES, 176_000, "m"),
    _wt("lth_maintenance_opening_floor", "維持管理のための点検開口（専用部の床）", _PIPES, 25_000, "箇所"),
    _wt("lth_maintenance_opening_wall_ceiling", "維持管理のための点検開口（専用部の壁又は天井）", _PIPES, 17_700, "箇所"),
    _wt("lth_maintenance_opening_common", "維持管理のための点検開口（共用部）", _PIPES, 132_300, "箇所"),
)


DEFAULT_TABLES: Mapping[Category, Tuple[WorkTypeDefinition, ...]] = MappingProxyType({
    Category.seismic: SEISMIC_WORK_TYPES,
    Category.barrier_free: BARRIER_FREE_WORK_TYPES,
    Category.energy: ENERGY_WORK_TYPES,
    Category.cohabitation: COHABITATION_WORK_TYPES,
    Category.childcare: CHILDCARE_WORK_TYPES,
    Category.other_renovation: OTHER_RENOVATION_WORK_TYPES,
    Category.long_term_housing: LONG_TERM_HOUSING_WORK_TYPES,
})


# ===========================================================================
# Catalog containers
# ===========================================================================

class WorkCatalog:
    """Read-only table of work types for one Category, indexed by code."""

    def __init__(self, category: Category, entries: Iterable[WorkTypeDefinition]) -> None:
        self.category = category
        self._entries: Tuple[WorkTypeDefinition, ...] = tuple(entries)
        index: Dict[str, WorkTypeDefinition] = {}
        for entry in self._entries:
            if entry.code in index:
                raise ValueError(f"Duplicate work type code '{entry.code}' in {category.value} catalog")
            index[entry.code] = entry
        self._index = MappingProxyType(index)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[WorkTypeDefinition]:
        return iter(self._entries)

    def __contains__(self, code: object) -> bool:
        return code in self._index

    @property
    def entries(self) -> Tuple[WorkTypeDefinition, ...]:
        return self._entries

    @property
    def codes(self) -> Tuple[str, ...]:
        return tuple(self._index)

    def lookup(self, code: str) -> WorkTypeDefinition:
        try:
            return self._index[code]
        except KeyError:
            raise UnknownWorkTypeError(
                f"Unknown work type code '{code}' for category '{self.category.value}'"
            ) from None

    def grouped(self) -> Dict[str, List[WorkTypeDefinition]]:
        """Entries grouped by sub-category, both in catalog order."""
        groups: Dict[str, List[WorkTypeDefinition]] = {}
        for entry in self._entries:
            groups.setdefault(entry.category, []).append(entry)
        return groups

    def sub_category_codes(self, sub_category: str) -> frozenset:
        return frozenset(e.code for e in self._entries if e.category == sub_category)

    def solar_codes(self) -> frozenset:
        return self.sub_category_codes(SOLAR_POWER_SUB_CATEGORY)


class CatalogSet:
    """All category catalogs for one process. Mapping-like, read-only."""

    def __init__(self, tables: Mapping[Category, Iterable[WorkTypeDefinition]]) -> None:
        self._catalogs = MappingProxyType({
            category: WorkCatalog(category, entries) for category, entries in tables.items()
        })

    def __getitem__(self, category: Category) -> WorkCatalog:
        try:
            return self._catalogs[category]
        except KeyError:
            raise UnknownWorkTypeError(f"No catalog loaded for category '{category.value}'") from None

    def __contains__(self, category: object) -> bool:
        return category in self._catalogs

    def __iter__(self) -> Iterator[Category]:
        return iter(self._catalogs)

    def lookup(self, category: Category, code: str) -> WorkTypeDefinition:
        return self[category].lookup(code)

    def solar_power_codes(self) -> frozenset:
        if Category.energy not in self._catalogs:
            return frozenset()
        return self._catalogs[Category.energy].solar_codes()


def has_solar_power_work(codes: Iterable[str], catalogs: CatalogSet) -> bool:
    """True if any code belongs to the energy catalog's solar-power sub-category."""
    solar = catalogs.solar_power_codes()
    return any(code in solar for code in codes)


@lru_cache(maxsize=1)
def load_catalogs() -> CatalogSet:
    """Build the default CatalogSet once per process."""
    catalogs = CatalogSet(DEFAULT_TABLES)
    logger.info(
        "Work catalogs loaded: %s",
        ", ".join(f"{c.value}={len(catalogs[c])}" for c in catalogs),
    )
    return catalogs


def get_catalogs() -> CatalogSet:
    """FastAPI dependency; override in tests to inject fixture catalogs."""
    return load_catalogs()


__all__ = [
    "SOLAR_POWER_SUB_CATEGORY",
    "DEFAULT_TABLES",
    "WorkCatalog",
    "CatalogSet",
    "has_solar_power_work",
    "load_catalogs",
    "get_catalogs",
]
