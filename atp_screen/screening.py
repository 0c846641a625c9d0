"""
ATP Yield Screening of Metabolic Reconstructions
=================================================
Batch test of refined (and optionally draft) COBRA reconstructions for
implausibly high ATP production on a Western diet.

Workflow:
1. List the model files of each folder
2. Test every model in a process pool: maximal ATP demand flux with and
   without oxygen
3. Plot the flux distributions
4. Report and save the refined models above the ATP limits
"""

import logging
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import List, Optional, Tuple

import cobra
import numpy as np
import pandas as pd
from tqdm import tqdm

from .atp_yield import test_atp
from .config import (AEROBIC_ATP_LIMIT, ANAEROBIC_ATP_LIMIT, N_WORKERS,
                     RECON_VERSION, TEST_RESULTS_FOLDER)
from .diet import load_diet
from .model_io import list_model_files, load_model, model_id_from_filename
from .plotting import plot_atp_distribution
from .report import collect_too_high, report_set, save_results_table, save_too_high

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ['set', 'model', 'file', 'aerobic', 'anaerobic']


# ============================================================================
# Worker functions (module level so they can be pickled)
# ============================================================================

def _test_model_worker(args) -> Tuple[float, float]:
    """
    Load one model and run the ATP test on it

    Arguments come as a tuple so the function can be submitted to a
    ProcessPoolExecutor.
    """
    model_path, diet, solver = args

    # worker processes do not inherit the solver choice
    if solver:
        cobra.Configuration().solver = solver

    model = load_model(model_path)
    return test_atp(model, diet=diet)


class ATPScreening:
    """
    ATP yield screening over folders of reconstructions

    Refined models above the aerobic or anaerobic limit are reported and
    saved. Draft models, when given, are tested and plotted alongside the
    refined ones but never flagged.
    """

    def __init__(
            self,
            refined_folder: str,
            test_results_folder: str = TEST_RESULTS_FOLDER,
            recon_version: str = RECON_VERSION,
            n_workers: int = N_WORKERS,
            translated_drafts_folder: Optional[str] = None,
            diet_path: Optional[str] = None,
            solver: Optional[str] = None,
            aerobic_limit: float = AEROBIC_ATP_LIMIT,
            anaerobic_limit: float = ANAEROBIC_ATP_LIMIT,
    ):
        """
        Parameters:
        -----------
        refined_folder : str
            Folder with refined COBRA models
        test_results_folder : str
            Folder where the plot and reports are saved
        recon_version : str
            Name of the reconstruction resource, used in titles and file names
        n_workers : int
            Worker processes; 0 or less runs the models one after another
        translated_drafts_folder : str, optional
            Folder with draft models to test alongside the refined ones
        diet_path : str, optional
            Diet table; the packaged Western diet by default
        solver : str, optional
            LP solver name for cobra, e.g. 'glpk', 'gurobi', 'cplex'
        aerobic_limit, anaerobic_limit : float
            ATP fluxes above these values flag a model
        """
        self.refined_folder = refined_folder
        self.test_results_folder = test_results_folder
        self.recon_version = recon_version
        self.n_workers = n_workers
        self.translated_drafts_folder = translated_drafts_folder
        self.solver = solver
        self.aerobic_limit = aerobic_limit
        self.anaerobic_limit = anaerobic_limit

        if solver:
            cobra.Configuration().solver = solver

        self.diet = load_diet(diet_path)

        if translated_drafts_folder:
            self.folders = [('Draft', translated_drafts_folder), ('Refined', refined_folder)]
        else:
            self.folders = [('Refined', refined_folder)]

        self.results = pd.DataFrame(columns=RESULT_COLUMNS)
        self.too_high_atp = []
        self.failed_models = []

    def _run_serial(self, args_list: List[tuple], desc: str) -> List[Tuple[float, float]]:
        fluxes = []
        for args in tqdm(args_list, desc=desc):
            try:
                fluxes.append(_test_model_worker(args))
            except Exception as e:
                logger.error(f"    ATP test failed for {args[0]}: {e}")
                self.failed_models.append(args[0])
                fluxes.append((np.nan, np.nan))
        return fluxes

    def _run_parallel(self, args_list: List[tuple], desc: str) -> List[Tuple[float, float]]:
        fluxes = [(np.nan, np.nan)] * len(args_list)
        with ProcessPoolExecutor(max_workers=self.n_workers) as executor:
            futures = {executor.submit(_test_model_worker, args): i
                       for i, args in enumerate(args_list)}
            for future in tqdm(as_completed(futures), total=len(futures), desc=desc):
                i = futures[future]
                try:
                    fluxes[i] = future.result()
                except Exception as e:
                    logger.error(f"    ATP test failed for {args_list[i][0]}: {e}")
                    self.failed_models.append(args_list[i][0])
        return fluxes

    def screen_folder(self, label: str, folder: str) -> pd.DataFrame:
        """
        Run the ATP test on every model file in a folder

        Returns:
        --------
        pd.DataFrame: one row per model file with columns
            'set', 'model', 'file', 'aerobic', 'anaerobic'
        """
        model_files = list_model_files(folder)
        args_list = [(os.path.join(folder, name), self.diet, self.solver) for name in model_files]

        desc = f"Testing ATP yield ({label.lower()})"
        if self.n_workers > 0 and len(args_list) > 1:
            fluxes = self._run_parallel(args_list, desc)
        else:
            fluxes = self._run_serial(args_list, desc)

        rows = []
        for name, (aerobic, anaerobic) in zip(model_files, fluxes):
            rows.append({
                'set': label,
                'model': model_id_from_filename(name),
                'file': name,
                'aerobic': aerobic,
                'anaerobic': anaerobic,
            })
        return pd.DataFrame(rows, columns=RESULT_COLUMNS).astype({'aerobic': float, 'anaerobic': float})

    def run(self) -> List[str]:
        """
        Screen all folders, plot, report and save the flagged refined models

        Returns:
        --------
        List[str]: IDs of refined models producing too much ATP
        """
        self.failed_models = []
        os.makedirs(self.test_results_folder, exist_ok=True)

        logger.info("=" * 70)
        logger.info(f"ATP yield screening on Western diet: {self.recon_version}")
        logger.info("=" * 70)
        for label, folder in self.folders:
            logger.info(f"{label} models: {folder}")
        logger.info(f"ATP limits: aerobic > {self.aerobic_limit}, anaerobic > {self.anaerobic_limit}")
        logger.info(f"Workers: {self.n_workers if self.n_workers > 0 else 'serial'}")
        logger.info(f"Solver: {cobra.Configuration().solver.__name__.split('.')[-1]}")

        frames = []
        for label, folder in self.folders:
            logger.info(f"\n>>> Testing {label.lower()} models")
            frames.append(self.screen_folder(label, folder))
        self.results = pd.concat(frames, ignore_index=True)

        save_results_table(self.results, self.test_results_folder, self.recon_version)
        plot_atp_distribution(self.results, self.test_results_folder, self.recon_version,
                              model_sets=[label for label, _ in self.folders])

        for label, _ in self.folders:
            report_set(self.results[self.results['set'] == label], label,
                       self.aerobic_limit, self.anaerobic_limit)

        self.too_high_atp = collect_too_high(self.results, self.aerobic_limit, self.anaerobic_limit)
        save_too_high(self.too_high_atp, self.test_results_folder)

        if self.failed_models:
            logger.warning(f"  {len(self.failed_models)} models could not be tested")

        logger.info("=" * 70)
        logger.info(f"Refined models with too much ATP: {len(self.too_high_atp)}")
        for model_id in self.too_high_atp:
            logger.info(f"  - {model_id}")
        logger.info("=" * 70)

        return self.too_high_atp
